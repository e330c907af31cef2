"""
Strict integer parsing for tool output and command-line values.
"""

import re

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# Leading whitespace and a sign are tolerated, trailing characters are not.
_INTEGER_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)\Z")


def parse_int(text: str) -> int:
    """Parse a complete base-10 numeral that fits in a signed 32-bit integer.

    Args:
        text: The string to parse, e.g. ``"  42"`` or ``"-7"``.

    Returns:
        The parsed integer value.

    Raises:
        ValueError: If the string is empty, holds only a sign, contains
            anything other than digits after the optional sign, or the value
            is outside the signed 32-bit range.

    Examples:
        >>> parse_int(" 35")
        35
        >>> parse_int("35 ")
        Traceback (most recent call last):
        ...
        ValueError: invalid integer literal: '35 '
    """
    match = _INTEGER_RE.match(text)
    if match is None:
        raise ValueError(f"invalid integer literal: {text!r}")

    value = int(match.group(1))
    if value < INT32_MIN or value > INT32_MAX:
        raise ValueError(f"integer out of 32-bit range: {text!r}")
    return value
