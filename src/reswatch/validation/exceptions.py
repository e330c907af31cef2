"""
Exception types and error reporting for the watchdog.

Two exception types cross module boundaries: ValidationError, raised while
building the configuration, and CommandTimeoutError, raised by the command
runner. Everything else is reported through ``handle_error`` and its
context-specific wrappers, which log at a chosen severity and either re-raise
or let the caller carry on with the next phase.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def log_level(self) -> int:
        return getattr(logging, self.name)


class ValidationError(Exception):
    """
    A configuration value (from TOML or a flag) was rejected.

    Attributes:
        field_name: Dotted name of the offending key, e.g. "watchdog.interval_seconds".
        value: The rejected raw value.
        severity: How loudly the error should be reported.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class CommandTimeoutError(Exception):
    """An external command was killed after running past the runner's timeout."""

    def __init__(self, command: str, timeout: float):
        super().__init__(f"Command '{command}' timed out after {timeout}s")
        self.command = command
        self.timeout = timeout


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log ``error`` with its context and optionally re-raise it.

    Args:
        error: The exception that occurred
        context: What was being done, e.g. "memory check"
        severity: Severity level, as an ErrorSeverity or its name
        reraise: Whether to re-raise the exception after logging
        logger: Logger of the calling module (defaults to this module's)
    """
    effective_logger = logger or globals()['logger']

    if isinstance(severity, str):
        severity = ErrorSeverity(severity.lower())

    # DEBUG and CRITICAL records carry the traceback.
    with_traceback = severity in (ErrorSeverity.DEBUG, ErrorSeverity.CRITICAL)
    effective_logger.log(severity.log_level, f"Error in {context}: {error}", exc_info=with_traceback)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Report an error met while loading or validating the configuration."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Report an error met while creating or writing a report file."""
    handle_error(error, f"file {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Report an error met while running an external command."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, exit_code: int = 1,
                     severity: ErrorSeverity = ErrorSeverity.ERROR, **kwargs) -> None:
    """Report a command-line error and exit the process with ``exit_code``."""
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)
    sys.exit(exit_code)
