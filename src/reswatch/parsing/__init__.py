"""
Parsing of external tool output into numbers.
"""

from .extractors import ColumnExtractor, FixedColumnExtractor, HeaderSearchExtractor
from .integers import INT32_MAX, INT32_MIN, parse_int

__all__ = [
    "ColumnExtractor",
    "FixedColumnExtractor",
    "HeaderSearchExtractor",
    "INT32_MAX",
    "INT32_MIN",
    "parse_int",
]
