"""
System interaction utilities.

This module provides command execution with timeouts and process tree
cleanup, and checks for the external tools the watchdog relies on.
"""

from .commands import (
    REQUIRED_TOOLS,
    CommandRunner,
    check_command_installed,
    find_missing_tools,
    terminate_process_tree,
)

__all__ = [
    "REQUIRED_TOOLS",
    "CommandRunner",
    "check_command_installed",
    "find_missing_tools",
    "terminate_process_tree",
]
