"""
Configuration management for the reswatch package.

This module provides loading, validation and cached access to the watchdog
configuration stored in a TOML file.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_toml_file, load_watchdog_section
from .validators import merge_config_overrides, validate_watchdog_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_watchdog_section",
    "merge_config_overrides",
    "validate_watchdog_config",
]
