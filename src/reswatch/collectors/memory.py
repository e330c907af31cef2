"""
Memory usage sampler based on ``free -L``.

``free -L`` prints a single line made of four blocks of the same width::

    SwapUse           0 CachUse     1180612 MemUse      2197296 MemFree    12875328

The used and free values are read from blocks 2 and 3.
"""

import logging
import math
from typing import Optional

from ..models.runtime import AlertKind
from ..parsing import FixedColumnExtractor
from .base import AbstractMetricSampler

logger = logging.getLogger(__name__)


class MemorySampler(AbstractMetricSampler):
    """Samples the percentage of memory in use."""

    kind = AlertKind.MEMORY
    command = "free -L"

    USED_BLOCK = 2
    FREE_BLOCK = 3

    def __init__(self, runner, extractor: Optional[FixedColumnExtractor] = None):
        super().__init__(runner)
        self.extractor = extractor or FixedColumnExtractor(self.command)

    def compute_percent(self, output: str) -> float:
        used_value = self.extractor.extract(output, self.USED_BLOCK)
        free_value = self.extractor.extract(output, self.FREE_BLOCK)

        total = used_value + free_value
        if total == 0:
            logger.warning(
                f"Used and free memory both read as 0 from '{self.command}'; "
                "memory usage is unknown for this cycle"
            )
            return math.nan

        return 100.0 * used_value / total
