"""
Defines the abstract base class for metric samplers.

A sampler runs one external command through a CommandRunner, extracts
numbers from its text output and turns them into a single percentage.
"""

import io
import logging
from abc import ABC, abstractmethod

from ..models.runtime import AlertKind, Sample
from ..system.commands import CommandRunner

logger = logging.getLogger(__name__)


class AbstractMetricSampler(ABC):
    """
    Abstract base class for metric samplers.

    Subclasses set ``kind`` and ``command`` and implement ``compute_percent``
    to turn the command output into a percentage.

    Attributes:
        kind: The alert kind this sampler measures.
        command: The shell command whose output is parsed.
    """

    kind: AlertKind
    command: str

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def sample(self, buffer: io.StringIO) -> Sample:
        """
        Run the command into ``buffer`` and compute one sample.

        The buffer is cleared before use. If the command cannot be executed
        the failure is logged and extraction proceeds on the empty output,
        which degrades the affected values to 0.

        Raises:
            CommandTimeoutError: If the command exceeded the runner's timeout.
        """
        output, has_executed = self.runner.run(self.command, buffer)
        if not has_executed:
            logger.error(f"Could not execute '{self.command}'")

        percent = self.compute_percent(output)
        logger.debug(f"{self.kind.value} usage: {percent:.2f}%")
        return Sample(kind=self.kind, percent=percent)

    @abstractmethod
    def compute_percent(self, output: str) -> float:
        """Turn the raw command output into a usage percentage."""
        pass
