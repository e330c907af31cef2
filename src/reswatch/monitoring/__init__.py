"""
Monitoring loop scheduling the samplers and breach handling.
"""

from .loop import MonitorLoop

__all__ = [
    "MonitorLoop",
]
