"""Minimal logging utilities for SmartScript.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure logging.

Example:
    >>> from smartscript.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing template")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "smartscript." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'smartscript.mymodule'
    """
    # Ensure smartscript prefix for consistent namespacing
    if not (name == "smartscript" or name.startswith("smartscript.")):
        name = f"smartscript.{name}"
    return logging.getLogger(name)
