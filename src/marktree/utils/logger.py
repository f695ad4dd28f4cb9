"""Minimal logging utilities for marktree.

Wraps the standard library logging so every logger lives under the
``marktree`` namespace. The library never installs handlers; applications
decide where DEBUG diagnostics go.

Example:
    >>> from marktree.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Rendering document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance prefixed with "marktree."

    Example:
        >>> get_logger("renderers").name
        'marktree.renderers'
    """
    if not (name == "marktree" or name.startswith("marktree.")):
        name = f"marktree.{name}"
    return logging.getLogger(name)
