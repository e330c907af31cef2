"""
Dispatch of breach notifications through a user-supplied command.
"""

import logging
import shlex

from ..models.runtime import AlertState, Sample
from ..system.commands import CommandRunner
from ..validation import CommandTimeoutError, ErrorSeverity, handle_subprocess_error
from .throttle import AlertThrottle

logger = logging.getLogger(__name__)


def format_notification_message(title: str, percent: float) -> str:
    """
    Build the notification text.

    Examples:
        >>> format_notification_message("CPU consumption is high", 85.0)
        'CPU consumption is high. Consumption is 85.00%'
    """
    return f"{title}. Consumption is {percent:.2f}%"


class Notifier:
    """
    Runs the notification command for a breach, subject to throttling.

    The message is appended to ``notify_command`` as a single shell-quoted
    argument. An empty ``notify_command`` disables notifications entirely.
    """

    def __init__(self, runner: CommandRunner, notify_command: str, throttle: AlertThrottle):
        self.runner = runner
        self.notify_command = notify_command
        self.throttle = throttle

    @property
    def enabled(self) -> bool:
        return bool(self.notify_command)

    def build_command(self, sample: Sample) -> str:
        message = format_notification_message(sample.kind.title, sample.percent)
        return f"{self.notify_command} {shlex.quote(message)}"

    def notify(self, state: AlertState, sample: Sample, now: float) -> bool:
        """
        Dispatch a notification for ``sample`` if the throttle allows it.

        The throttle is marked once the command has been started, whatever
        its exit code. A non-zero exit is logged.

        Args:
            state: Alert state holding the last notification times.
            sample: The breaching sample.
            now: Current time in seconds since the epoch.

        Returns:
            True if the notification command was run.
        """
        if not self.enabled:
            return False

        if not self.throttle.should_notify(state, sample.kind, now):
            logger.info(f"{sample.kind.value} notification suppressed by throttle")
            return False

        command = self.build_command(sample)
        try:
            result_code = self.runner.execute(command)
        except CommandTimeoutError as e:
            handle_subprocess_error(e, command, severity=ErrorSeverity.CRITICAL, reraise=False, logger=logger)
            return False

        if result_code == -1:
            logger.error(f"Could not start notification command '{command}'")
            return False
        if result_code != 0:
            logger.warning(f"Notification script exited with non-zero code {result_code}")

        self.throttle.mark_notified(state, sample.kind, now)
        logger.info(f"Sent {sample.kind.value} notification: {sample.percent:.2f}%")
        return True
