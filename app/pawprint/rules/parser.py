"""Configuration line parser.

Each rule line has the form::

    <type><modifiers> <path> <mode> <user> <group> <age> <argument...>

The first six fields are split with shell quoting rules; whatever
follows the age field is the argument, taken verbatim.
"""

import logging
import shlex
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from pawprint.models.run import RunConfig
from pawprint.rules.attributes import MODIFIERS, Flag, resolve_type

logger = logging.getLogger(__name__)

# Sentinel for a field that is absent or given as "-".
UNSET = "-"

FIELD_COUNT = 6


@dataclass(frozen=True, slots=True)
class OperationRecord:
    """Composed operation for one configuration line.

    One record is created per line and shared, read-only, by every path
    the line's pattern expands to.

    Attributes:
        flags: Capability flags with modifiers already stripped.
        mode: Octal permission text or UNSET.
        user: User name (or numeric id) or UNSET.
        group: Group name (or numeric id) or UNSET.
        age: Age expression or UNSET.
        argument: Trailing text of the line, used by write and attribute rules.
    """

    flags: Flag
    mode: str = UNSET
    user: str = UNSET
    group: str = UNSET
    age: str = UNSET
    argument: str = ""


@dataclass(frozen=True, slots=True)
class Rule:
    """A parsed rule ready for expansion and dispatch.

    Attributes:
        type_text: Raw type field, e.g. ``"d"`` or ``"r!"``.
        path: Literal path, or glob pattern when needs_glob is set.
        record: Operation record applied to every resolved path.
        needs_glob: Whether the path must be expanded before dispatch.
        source: Name of the configuration file the rule came from.
        line_number: 1-based line number within the source.
    """

    type_text: str
    path: str
    record: OperationRecord
    needs_glob: bool = False
    source: str = "<input>"
    line_number: int = 0

    @property
    def location(self) -> str:
        """Human-readable source location of the rule."""
        return f"{self.source}:{self.line_number}"


def is_unset(value: str) -> bool:
    """Check if a rule field is absent or explicitly set to ``-``."""
    return not value or value == UNSET


def _split_fields(line: str) -> tuple[list[str], str]:
    """Split a line into up to six shell words and the remaining text.

    Raises:
        ValueError: If the line contains an unterminated quote.
    """
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""

    fields: list[str] = []
    while len(fields) < FIELD_COUNT:
        token = lexer.get_token()
        if token is None:
            return fields, ""
        fields.append(token)

    return fields, lexer.instream.read()


def _clean_argument(remainder: str) -> str:
    argument = remainder.lstrip(" \t")
    if argument.endswith("\n"):
        argument = argument[:-1]
    return argument


def parse_line(
    line: str,
    config: RunConfig,
    source: str = "<input>",
    line_number: int = 0,
) -> Rule | None:
    """Parse one configuration line into a rule.

    Args:
        line: Raw line, optionally including its trailing newline.
        config: Execution modes; boot mode decides whether ``!`` rules apply.
        source: Name of the configuration stream, for log messages.
        line_number: 1-based line number within the source.

    Returns:
        The parsed Rule, or None if the line is blank, a comment,
        malformed, or suppressed by the on-boot-only modifier.
    """
    stripped = line.lstrip(" \t")
    if not stripped.strip() or stripped.startswith("#"):
        return None

    location = f"{source}:{line_number}"
    try:
        fields, remainder = _split_fields(line)
    except ValueError as e:
        logger.warning("%s: Cannot parse line: %s", location, e)
        return None

    if len(fields) < 2:
        logger.warning("%s: Missing path for type %r", location, fields[0])
        return None

    type_text, path = fields[0], fields[1]
    flags = resolve_type(type_text, location)

    if Flag.ON_BOOT in flags and not config.boot:
        logger.debug("%s: Skipping boot-only rule for %s", location, path)
        return None

    padded = fields[2:] + [UNSET] * (FIELD_COUNT - len(fields))
    mode, user, group, age = padded

    record = OperationRecord(
        flags=flags & ~MODIFIERS,
        mode=mode,
        user=user,
        group=group,
        age=age,
        argument=_clean_argument(remainder),
    )

    return Rule(
        type_text=type_text,
        path=path,
        record=record,
        needs_glob=Flag.NEEDS_GLOB in flags,
        source=source,
        line_number=line_number,
    )


def parse_rules(lines: Iterable[str], config: RunConfig, source: str = "<input>") -> Iterator[Rule]:
    """Parse configuration lines in order, yielding applicable rules.

    Args:
        lines: Lines of a configuration stream.
        config: Execution modes passed to parse_line.
        source: Name of the stream for log messages.

    Yields:
        Rule for every line that is not skipped.
    """
    for number, line in enumerate(lines, start=1):
        rule = parse_line(line, config, source, number)
        if rule is not None:
            yield rule
