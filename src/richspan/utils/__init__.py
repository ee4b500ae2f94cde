"""Utility modules for richspan.

Provides:
- logger: get_logger for logging
"""

from richspan.utils.logger import get_logger

__all__ = [
    "get_logger",
]
