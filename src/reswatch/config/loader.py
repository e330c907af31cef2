"""
Reading the TOML configuration file.

Only the `[watchdog]` table is used. Its values are returned raw; checking
them is the job of ``validators``.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)

WATCHDOG_SECTION = "watchdog"


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Parse ``file_path`` as TOML.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    logger.info(f"Reading {description} {file_path}")
    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {file_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_watchdog_section(config_path: Path) -> Dict[str, Any]:
    """
    Return the raw `[watchdog]` table of ``config_path``.

    A file without the table yields an empty dict, so every key keeps its
    default.

    Raises:
        TypeError: If `watchdog` is present but is not a table
    """
    data = load_toml_file(config_path)
    section = data.get(WATCHDOG_SECTION, {})
    if not isinstance(section, dict):
        handle_config_error(
            error=TypeError(f"'{WATCHDOG_SECTION}' must be a table, got {type(section).__name__}"),
            context=f"reading {config_path}",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
    if not section:
        logger.warning(f"No [{WATCHDOG_SECTION}] settings in {config_path}; using defaults")
    return section
