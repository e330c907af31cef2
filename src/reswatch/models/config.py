"""
Configuration data models.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class WatchdogConfig:
    """
    Settings of the watchdog, fixed for the lifetime of the process.

    Built from defaults, the `[watchdog]` table of `config.toml` and the
    command-line flags, in increasing order of precedence.
    """

    # Memory usage percentage that counts as a breach, in [0, 100).
    mem_threshold_pct: float = 70.0
    # CPU usage percentage that counts as a breach, in [0, 100).
    cpu_threshold_pct: float = 70.0
    # Seconds to sleep between two monitoring cycles.
    interval_seconds: int = 60
    # Notification command; the message is appended as one quoted argument.
    # An empty string disables notifications.
    notify_command: str = ""
    # Minimum number of seconds between two notifications of the same kind.
    throttle_seconds: int = 20 * 60
    # Maximum run time of any external command; 0 waits forever.
    command_timeout_seconds: float = 30.0
    # Directory receiving the snapshot report files.
    report_dir: Path = field(default_factory=lambda: Path("."))
    log_level: str = "INFO"

    @property
    def notifications_enabled(self) -> bool:
        return bool(self.notify_command)
