"""
Metric samplers turning external tool output into usage percentages.
"""

from .base import AbstractMetricSampler
from .cpu import CpuSampler
from .memory import MemorySampler

__all__ = [
    "AbstractMetricSampler",
    "CpuSampler",
    "MemorySampler",
]
