"""
Per-kind notification throttling.
"""

import logging

from ..models.runtime import AlertKind, AlertState

logger = logging.getLogger(__name__)


class AlertThrottle:
    """
    Allows at most one notification per alert kind per cooldown window.

    The throttle itself is stateless apart from the cooldown; the timestamps
    live in the AlertState passed to each call, which is the only place they
    are modified.
    """

    def __init__(self, cooldown_seconds: float):
        self.cooldown_seconds = cooldown_seconds

    def should_notify(self, state: AlertState, kind: AlertKind, now: float) -> bool:
        """True if ``now`` is past the cooldown window of the last notification."""
        return now > state.last_sent_for(kind) + self.cooldown_seconds

    def mark_notified(self, state: AlertState, kind: AlertKind, now: float) -> None:
        """Record that a notification of ``kind`` was dispatched at ``now``."""
        state.last_sent[kind] = now
        logger.debug(
            f"{kind.value} notifications throttled until {now + self.cooldown_seconds:.0f}"
        )
