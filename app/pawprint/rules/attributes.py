"""Attribute table mapping rule type characters to capability flags.

Bit positions define the order in which the dispatcher runs handlers:
lower bits always run first. Bit 0 is reserved and never a capability.
"""

import logging
from enum import IntFlag

logger = logging.getLogger(__name__)


class Flag(IntFlag):
    """Capability flags a rule can enable.

    Values are explicit so that handler order never depends on the
    order members are declared in.
    """

    CREATE = 1 << 1
    APPEND = 1 << 2
    ON_BOOT = 1 << 3
    CREATE_DIRECTORY = 1 << 4
    NEEDS_GLOB = 1 << 5
    NO_FOLLOW = 1 << 6
    RECURSIVE = 1 << 7
    OWNERSHIP = 1 << 8
    PERMISSION = 1 << 9
    WRITE = 1 << 10
    CLEAN = 1 << 11
    REMOVE = 1 << 12
    ATTRIBUTES = 1 << 13
    EXCLUDE = 1 << 14


NO_FLAGS = Flag(0)

# Modifiers gate or transform a rule and are stripped before dispatch.
MODIFIERS: Flag = Flag.ON_BOOT | Flag.NEEDS_GLOB

_DIRECTORY = Flag.CREATE_DIRECTORY | Flag.OWNERSHIP | Flag.PERMISSION | Flag.CLEAN

ATTRIBUTE_TABLE: dict[str, Flag] = {
    "f": Flag.CREATE | Flag.WRITE | Flag.OWNERSHIP | Flag.PERMISSION,
    "w": Flag.WRITE,
    "d": _DIRECTORY,
    "D": _DIRECTORY | Flag.REMOVE,
    # Subvolumes are not supported; q and Q behave like d and D.
    "q": _DIRECTORY,
    "Q": _DIRECTORY | Flag.REMOVE,
    "r": Flag.REMOVE | Flag.NEEDS_GLOB,
    "h": Flag.ATTRIBUTES | Flag.NEEDS_GLOB,
    "x": Flag.EXCLUDE,
    "!": Flag.ON_BOOT,
    "+": Flag.APPEND,
}


def resolve_type(type_text: str, location: str = "") -> Flag:
    """Combine the flags of every character in a rule type field.

    Unknown characters are reported and contribute no flags.

    Args:
        type_text: Type field of a rule, e.g. ``"d"`` or ``"r!"``.
        location: Source location used in warning messages.

    Returns:
        Logical OR of the flags of all known characters.
    """
    flags = NO_FLAGS
    for char in type_text:
        char_flags = ATTRIBUTE_TABLE.get(char)
        if char_flags is None:
            logger.warning("%sInvalid type %r", f"{location}: " if location else "", char)
            continue
        flags |= char_flags
    return flags
