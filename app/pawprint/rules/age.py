"""Age expression parsing.

An age is a sequence of ``<number><unit>`` terms such as ``1d`` or
``2w3d12h``. Units are ``s``, ``m``, ``h``, ``d`` and ``w``; a bare
trailing number counts as seconds.
"""

import re

# Returned for malformed expressions; callers treat the entry as due now.
AGE_INVALID: float = -1.0

AGE_UNITS: dict[str, int] = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}

_NUMBER = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_age(text: str) -> float | None:
    """Convert an age expression into seconds.

    Args:
        text: Age expression from a rule's age field.

    Returns:
        Duration in seconds, None when the expression disables the age
        limit (empty or starting with ``-``), or AGE_INVALID if a number
        or unit cannot be parsed.
    """
    text = text.strip()
    if not text or text.startswith("-"):
        return None

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _NUMBER.match(text, pos)
        if match is None:
            return AGE_INVALID
        amount = float(match.group())
        pos = match.end()

        if pos == len(text):
            total += amount
            break

        factor = AGE_UNITS.get(text[pos])
        if factor is None:
            return AGE_INVALID
        total += amount * factor
        pos += 1

    return total
