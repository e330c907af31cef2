"""
Command-line interface for the reswatch package.
"""

from .main import main_cli

__all__ = [
    "main_cli",
]
