"""Minimal logging utilities for richspan.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from richspan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tokenizing comment body")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "richspan." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'richspan.mymodule'
    """
    if not (name == "richspan" or name.startswith("richspan.")):
        name = f"richspan.{name}"
    return logging.getLogger(name)
