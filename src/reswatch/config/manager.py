"""
Process-wide access to the watchdog configuration.

The configuration is loaded from TOML on first use and cached; the CLI and
the tests pick the file with ``set_config_path``.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import WatchdogConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_watchdog_section
from .validators import validate_watchdog_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[WatchdogConfig] = None

# Default path to the configuration file, relative to this script's location.
# Overridden by the CLI's --config flag or by tests.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
# An explicitly set file must exist; the default one is optional.
_CONFIG_PATH_REQUIRED = False


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Point the loader at another config.toml.

    Passing None restores the default path.

    Args:
        config_path: Path to the config.toml file

    Note:
        The cached configuration is cleared so the next call to get_config()
        reads the new file.
    """
    global _CONFIG_FILE_PATH, _CONFIG_PATH_REQUIRED, _CONFIG
    if config_path is None:
        _CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
        _CONFIG_PATH_REQUIRED = False
    else:
        _CONFIG_FILE_PATH = Path(config_path)
        _CONFIG_PATH_REQUIRED = True
    _CONFIG = None
    logger.debug(f"Configuration path set to: {_CONFIG_FILE_PATH}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path, required: bool) -> WatchdogConfig:
    """
    Load and validate the configuration.

    Raises:
        FileNotFoundError: If a required configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if not required and not config_path.exists():
        logger.info(f"No configuration file at {config_path}, using defaults")
        return WatchdogConfig()

    try:
        watchdog_data = load_watchdog_section(config_path)
        config = validate_watchdog_config(watchdog_data)
        logger.info(f"Successfully loaded configuration from {config_path}")
        return config
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> WatchdogConfig:
    """
    Get the global configuration, loading it if necessary.

    Returns:
        The singleton WatchdogConfig instance

    Raises:
        FileNotFoundError: If an explicitly set configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH, _CONFIG_PATH_REQUIRED)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Describe which file the configuration comes from and whether it is loaded.

    Returns:
        Dictionary with the loaded flag, the path and whether the path must exist
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "config_path_required": _CONFIG_PATH_REQUIRED,
    }
