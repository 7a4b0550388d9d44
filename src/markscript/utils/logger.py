"""Minimal logging utilities for markscript.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from markscript.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "markscript." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'markscript.mymodule'
    """
    # Ensure markscript prefix for consistent namespacing
    if not (name == "markscript" or name.startswith("markscript.")):
        name = f"markscript.{name}"
    return logging.getLogger(name)
