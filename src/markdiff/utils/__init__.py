"""Utility modules for markdiff.

Provides:
- logger: get_logger for namespaced logging
"""

from markdiff.utils.logger import get_logger

__all__ = [
    "get_logger",
]
