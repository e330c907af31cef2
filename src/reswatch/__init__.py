"""
reswatch: memory and CPU watchdog built on standard Linux tools.

The watchdog periodically samples memory usage (`free -L`) and CPU usage
(`sar`), saves process reports (`ps`, `top`) whenever a threshold is met and
runs a throttled notification command.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- system: Command execution and tool detection
- parsing: Extraction of numbers from tool output
- collectors: Memory and CPU samplers
- alerting: Throttling, notifications and snapshots
- monitoring: The monitoring loop
- cli: Command-line interface

Usage:
    From command line:
        reswatch [options]

    Programmatically:
        from reswatch import MonitorLoop, get_config
        loop = MonitorLoop(get_config())
        loop.run_cycle()
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .monitoring import MonitorLoop
from .cli import main_cli

# Model classes for external use
from .models import AlertKind, AlertState, Sample, WatchdogConfig

# Building blocks
from .alerting import AlertThrottle, Notifier, SnapshotCapturer
from .collectors import CpuSampler, MemorySampler
from .parsing import FixedColumnExtractor, HeaderSearchExtractor, parse_int
from .system import CommandRunner

# Validation utilities
from .validation import CommandTimeoutError, ValidationError

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "MonitorLoop",
    "main_cli",
    # Models
    "AlertKind",
    "AlertState",
    "Sample",
    "WatchdogConfig",
    # Building blocks
    "AlertThrottle",
    "Notifier",
    "SnapshotCapturer",
    "CpuSampler",
    "MemorySampler",
    "FixedColumnExtractor",
    "HeaderSearchExtractor",
    "parse_int",
    "CommandRunner",
    # Validation
    "CommandTimeoutError",
    "ValidationError",
]
