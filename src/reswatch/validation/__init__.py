"""
Validation and error handling for the reswatch package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    CommandTimeoutError,
    ErrorSeverity,
    ValidationError,
    handle_error,
    handle_config_error,
    handle_file_error,
    handle_subprocess_error,
    handle_cli_error,
)

# Validation functions
from .validators import (
    VALID_LOG_LEVELS,
    validate_command_template,
    validate_log_level,
    validate_positive_float,
    validate_positive_integer,
    validate_threshold_pct,
)

__all__ = [
    # Core functionality
    "CommandTimeoutError",
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "VALID_LOG_LEVELS",
    "validate_command_template",
    "validate_log_level",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_threshold_pct",
]
