"""Utility modules for hexpanel.

Provides:
- logger: get_logger for namespaced logging
"""

from hexpanel.utils.logger import get_logger

__all__ = [
    "get_logger",
]
