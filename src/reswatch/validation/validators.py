"""
Validators for configuration values.

Each validator takes the raw value (as read from TOML or converted from a
command-line flag) and the dotted name of the key it came from, and returns
the normalized value or raises ValidationError naming that key.
"""

import math
from typing import Any, NoReturn, Optional, Union

from .exceptions import ValidationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

Number = Union[int, float]


def _reject(message: str, field_name: str, value: Any) -> NoReturn:
    raise ValidationError(message, field_name=field_name, value=value)


def _check_bounds(number: Number, raw: Any, min_value: Number,
                  max_value: Optional[Number], field_name: str) -> Number:
    if number < min_value:
        _reject(f"{field_name} must be >= {min_value}, got {number}", field_name, raw)
    if max_value is not None and number > max_value:
        _reject(f"{field_name} must be <= {max_value}, got {number}", field_name, raw)
    return number


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate a whole number of seconds or similar count.

    Integral floats (``30.0``) are accepted. Booleans are not, although
    Python treats them as integers.

    Raises:
        ValidationError: If the value is not an integer within the bounds
    """
    is_fractional = isinstance(value, float) and not value.is_integer()
    if isinstance(value, bool) or is_fractional:
        _reject(f"{field_name} must be a valid integer, got {value}", field_name, value)
    try:
        int_value = int(value)
    except (ValueError, TypeError, OverflowError):
        _reject(f"{field_name} must be a valid integer, got {value}", field_name, value)
    return _check_bounds(int_value, value, min_value, max_value, field_name)


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate a finite number within the given bounds.

    Strings holding a number are accepted, so the same validator serves TOML
    values and command-line text.

    Raises:
        ValidationError: If the value is not a finite number within the bounds
    """
    if isinstance(value, bool):
        _reject(f"{field_name} must be a valid number, got {value}", field_name, value)
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        _reject(f"{field_name} must be a valid number, got {value}", field_name, value)
    if not math.isfinite(float_value):
        _reject(f"{field_name} must be a finite number, got {value}", field_name, value)
    return _check_bounds(float_value, value, min_value, max_value, field_name)


def validate_threshold_pct(value: Any, field_name: str = "threshold") -> float:
    """Validate an alert threshold percentage in [0, 100)."""
    pct = validate_positive_float(value, min_value=0.0, max_value=100.0, field_name=field_name)
    if pct >= 100.0:
        _reject(f"{field_name} must be < 100, got {pct}", field_name, value)
    return pct


def validate_command_template(value: Any, field_name: str = "command") -> str:
    """
    Validate an optional shell command line.

    Surrounding whitespace is stripped. An empty string is accepted and means
    the command is disabled.
    """
    if not isinstance(value, str):
        _reject(f"{field_name} must be a string, got {type(value).__name__}", field_name, value)
    command = value.strip()
    if "\n" in command or "\r" in command:
        _reject(f"{field_name} must be a single line", field_name, value)
    return command


def validate_log_level(value: Any, field_name: str = "log_level") -> str:
    """Validate a logging level name, case-insensitively."""
    if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
        _reject(f"{field_name} must be one of {VALID_LOG_LEVELS}, got {value!r}", field_name, value)
    return value.upper()
