"""Minimal logging utilities for mathdown.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from mathdown.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rewriting document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "mathdown." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'mathdown.mymodule'
    """
    if not (name == "mathdown" or name.startswith("mathdown.")):
        name = f"mathdown.{name}"
    return logging.getLogger(name)
