"""
The monitoring loop.

Each cycle samples memory, then CPU. A sample that meets its threshold
triggers a diagnostic snapshot and a throttled notification. The loop then
sleeps for the configured interval and starts over, forever.

The memory and CPU phases are independent: whatever goes wrong in one phase
is logged and the other phase still runs. Nothing raised by a phase ends the
loop.
"""

import io
import logging
import time
from typing import Callable, List, Optional

from ..alerting import AlertThrottle, Notifier, SnapshotCapturer
from ..collectors import AbstractMetricSampler, CpuSampler, MemorySampler
from ..models.config import WatchdogConfig
from ..models.runtime import AlertState, MonitorState, Sample
from ..system.commands import CommandRunner
from ..validation import CommandTimeoutError, ErrorSeverity, handle_error

logger = logging.getLogger(__name__)


class MonitorLoop:
    """
    Drives the samplers and reacts to threshold breaches.

    Collaborators are built from the configuration unless given explicitly,
    which lets tests substitute runners, samplers, the clock and the sleep
    function.
    """

    def __init__(
        self,
        config: WatchdogConfig,
        runner: Optional[CommandRunner] = None,
        memory_sampler: Optional[AbstractMetricSampler] = None,
        cpu_sampler: Optional[AbstractMetricSampler] = None,
        snapshot_capturer: Optional[SnapshotCapturer] = None,
        notifier: Optional[Notifier] = None,
        alert_state: Optional[AlertState] = None,
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.runner = runner or CommandRunner(timeout=config.command_timeout_seconds)
        self.memory_sampler = memory_sampler or MemorySampler(self.runner)
        self.cpu_sampler = cpu_sampler or CpuSampler(self.runner)
        self.snapshot_capturer = snapshot_capturer or SnapshotCapturer(self.runner, config.report_dir)
        self.notifier = notifier or Notifier(
            self.runner, config.notify_command, AlertThrottle(config.throttle_seconds)
        )
        self.alert_state = alert_state or AlertState()
        self.clock = clock
        self.sleep = sleep

        self.state = MonitorState.IDLE
        self.cycle_count = 0
        # Shared by both samplers; phases run one after the other.
        self._read_buffer = io.StringIO()

    def run_cycle(self) -> List[Sample]:
        """
        Run one monitoring cycle: the memory phase, then the CPU phase.

        Returns:
            The samples taken this cycle. A phase that failed contributes no
            sample.
        """
        self.cycle_count += 1
        samples: List[Sample] = []

        phases = (
            (self.memory_sampler, self.config.mem_threshold_pct),
            (self.cpu_sampler, self.config.cpu_threshold_pct),
        )
        for sampler, threshold_pct in phases:
            sample = self._run_phase(sampler, threshold_pct)
            if sample is not None:
                samples.append(sample)

        self.state = MonitorState.IDLE
        return samples

    def _run_phase(self, sampler: AbstractMetricSampler, threshold_pct: float) -> Optional[Sample]:
        phase_name = f"{sampler.kind.value} check"
        try:
            self.state = MonitorState.SAMPLING
            sample = sampler.sample(self._read_buffer)

            self.state = MonitorState.EVALUATING
            if not sample.is_valid:
                logger.warning(f"Ignoring non-finite {sample.kind.value} usage sample: {sample.percent}")
                return sample

            if sample.breaches(threshold_pct):
                logger.warning(
                    f"{sample.kind.title}: {sample.percent:.2f}% (threshold {threshold_pct:.2f}%)"
                )
                self.state = MonitorState.NOTIFYING
                self.snapshot_capturer.capture(sample)
                self.notifier.notify(self.alert_state, sample, self.clock())
            else:
                logger.debug(f"{sample.kind.value} usage {sample.percent:.2f}% below threshold")
            return sample

        except CommandTimeoutError as e:
            handle_error(e, phase_name, severity=ErrorSeverity.CRITICAL, reraise=False, logger=logger)
            return None
        except Exception as e:
            logger.error(
                f"Unexpected error during {phase_name}: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return None

    def run_forever(self) -> None:
        """Run cycles separated by the configured interval until the process ends."""
        logger.info(
            f"Watching memory >= {self.config.mem_threshold_pct:.2f}% and "
            f"CPU >= {self.config.cpu_threshold_pct:.2f}% every {self.config.interval_seconds}s"
        )
        if not self.notifier.enabled:
            logger.info("No notification command configured; breaches only produce reports")

        while True:
            self.run_cycle()
            self.sleep(self.config.interval_seconds)
