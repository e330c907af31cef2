"""
Breach handling: throttling, notification dispatch and diagnostic snapshots.
"""

from .notifier import Notifier, format_notification_message
from .snapshots import (
    DEFAULT_DIAGNOSTICS,
    DiagnosticCommand,
    SnapshotCapturer,
    build_report_name,
)
from .throttle import AlertThrottle

__all__ = [
    "AlertThrottle",
    "DEFAULT_DIAGNOSTICS",
    "DiagnosticCommand",
    "Notifier",
    "SnapshotCapturer",
    "build_report_name",
    "format_notification_message",
]
