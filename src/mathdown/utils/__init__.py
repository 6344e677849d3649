"""Utility modules for mathdown.

Provides:
- logger: get_logger for namespaced logging
"""

from mathdown.utils.logger import get_logger

__all__ = [
    "get_logger",
]
