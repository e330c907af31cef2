"""
Data models for the watchdog.

Configuration Models:
- WatchdogConfig: thresholds, interval, notification and timeout settings

Runtime Models:
- AlertKind: the monitored dimensions (memory, CPU)
- AlertState: last notification time per alert kind
- MonitorState: states of the monitor loop
- Sample: one percentage measurement
"""

# Configuration models
from .config import WatchdogConfig

# Runtime models
from .runtime import AlertKind, AlertState, MonitorState, Sample

__all__ = [
    # Configuration
    "WatchdogConfig",
    # Runtime
    "AlertKind",
    "AlertState",
    "MonitorState",
    "Sample",
]
