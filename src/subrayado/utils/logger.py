"""Minimal logging utilities for Subrayado.

Provides a simple get_logger function that wraps the standard library logging.
Library code only emits DEBUG records and never installs handlers.

Example:
    >>> from subrayado.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving paragraph")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "subrayado." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'subrayado.mymodule'
    """
    if not (name == "subrayado" or name.startswith("subrayado.")):
        name = f"subrayado.{name}"
    return logging.getLogger(name)
