"""Utility modules for SmartScript.

Provides:
- logger: get_logger for logging
"""

from smartscript.utils.logger import get_logger

__all__ = [
    "get_logger",
]
