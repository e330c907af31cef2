"""
Configuration validation utilities.

This module turns raw configuration data (from TOML or from command-line
overrides) into a validated WatchdogConfig.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import WatchdogConfig
from ..validation import (
    ValidationError,
    validate_command_template,
    validate_log_level,
    validate_positive_float,
    validate_positive_integer,
    validate_threshold_pct,
)

logger = logging.getLogger(__name__)

KNOWN_KEYS = frozenset(field.name for field in dataclasses.fields(WatchdogConfig))


def _validate_report_dir(value: Any, field_name: str) -> Path:
    if not isinstance(value, (str, Path)) or not str(value).strip():
        raise ValidationError(
            f"{field_name} must be a non-empty path",
            field_name=field_name,
            value=value
        )
    return Path(value).expanduser()


def _validate_field(name: str, value: Any) -> Any:
    field_name = f"watchdog.{name}"
    if name in ("mem_threshold_pct", "cpu_threshold_pct"):
        return validate_threshold_pct(value, field_name=field_name)
    if name in ("interval_seconds", "throttle_seconds"):
        return validate_positive_integer(value, min_value=0, field_name=field_name)
    if name == "command_timeout_seconds":
        return validate_positive_float(value, min_value=0.0, field_name=field_name)
    if name == "notify_command":
        return validate_command_template(value, field_name=field_name)
    if name == "report_dir":
        return _validate_report_dir(value, field_name)
    if name == "log_level":
        return validate_log_level(value, field_name=field_name)
    raise ValidationError(f"Unknown configuration key: {field_name}", field_name=field_name, value=value)


def validate_watchdog_config(watchdog_data: Dict[str, Any]) -> WatchdogConfig:
    """
    Validate and create a WatchdogConfig from raw configuration data.

    Missing keys take their default values. Unknown keys are ignored with a
    warning.

    Args:
        watchdog_data: Raw `[watchdog]` table from TOML

    Returns:
        Validated WatchdogConfig instance

    Raises:
        ValidationError: If validation fails
    """
    return merge_config_overrides(WatchdogConfig(), watchdog_data)


def merge_config_overrides(config: WatchdogConfig, overrides: Dict[str, Any]) -> WatchdogConfig:
    """
    Return a copy of ``config`` with validated ``overrides`` applied.

    Keys whose value is None are skipped, so unset command-line flags can be
    passed through unchanged.

    Raises:
        ValidationError: If an override value is invalid
    """
    validated: Dict[str, Any] = {}
    for name, value in overrides.items():
        if value is None:
            continue
        if name not in KNOWN_KEYS:
            logger.warning(f"Ignoring unknown configuration key 'watchdog.{name}'")
            continue
        validated[name] = _validate_field(name, value)

    return dataclasses.replace(config, **validated)
