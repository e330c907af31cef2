"""
CPU usage sampler based on ``sar``.

``sar --dec=0 1 1 | tail -n 3`` samples CPU activity over one second and
keeps the header row, the sample row and the average row::

    12:00:01        CPU     %user     %nice   %system   %iowait    %steal     %idle
    12:00:02        all         3         0         1         0         0        96
    Average:        all         3         0         1         0         0        96
"""

from typing import Optional

from ..models.runtime import AlertKind
from ..parsing import HeaderSearchExtractor
from .base import AbstractMetricSampler


class CpuSampler(AbstractMetricSampler):
    """Samples the percentage of CPU time not spent idle."""

    kind = AlertKind.CPU
    command = "sar --dec=0 1 1 | tail -n 3"

    IDLE_MARKER = "%idle"

    def __init__(self, runner, extractor: Optional[HeaderSearchExtractor] = None):
        super().__init__(runner)
        self.extractor = extractor or HeaderSearchExtractor(self.command, self.IDLE_MARKER)

    def compute_percent(self, output: str) -> float:
        idle_value = self.extractor.try_extract(output, 1)
        if idle_value is None:
            # An unreadable report counts as no usage rather than full usage.
            return 0.0
        return float(100 - idle_value)
