"""
Runtime data models.

This module contains the data structures that live while the watchdog runs:
the alert kinds, the per-kind notification timestamps and the transient
samples produced each cycle.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class AlertKind(Enum):
    """The dimensions along which thresholds and throttling are tracked."""

    MEMORY = "memory"
    CPU = "cpu"

    @property
    def report_prefix(self) -> str:
        """Prefix of the snapshot report file names."""
        return "mem" if self is AlertKind.MEMORY else "cpu"

    @property
    def title(self) -> str:
        """Title used in notification messages."""
        if self is AlertKind.MEMORY:
            return "Memory consumption is high"
        return "CPU consumption is high"


class MonitorState(Enum):
    """States of the monitor loop."""

    IDLE = "idle"
    SAMPLING = "sampling"
    EVALUATING = "evaluating"
    NOTIFYING = "notifying"


@dataclass
class AlertState:
    """
    Time of the last dispatched notification for each alert kind.

    Timestamps are seconds since the epoch. They start at 0.0 so that the
    first breach of each kind is allowed to notify.
    """

    last_sent: Dict[AlertKind, float] = field(
        default_factory=lambda: {kind: 0.0 for kind in AlertKind}
    )

    def last_sent_for(self, kind: AlertKind) -> float:
        return self.last_sent.get(kind, 0.0)


@dataclass(frozen=True)
class Sample:
    """A single percentage measurement for one alert kind."""

    kind: AlertKind
    percent: float

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.percent)

    def breaches(self, threshold_pct: float) -> bool:
        """True if this sample meets or exceeds ``threshold_pct``."""
        return self.is_valid and self.percent >= threshold_pct
