"""Logging helpers for richmark.

All library loggers live under the ``richmark`` namespace. The package
root logger carries a ``NullHandler``, so nothing is printed unless the
application configures logging itself.

Example:
    >>> import logging
    >>> logging.getLogger("richmark").setLevel(logging.DEBUG)
    >>> logger = get_logger("richmark.parser")
    >>> logger.debug("Parsed %d blocks from %d lines%s", 3, 12, "")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "richmark"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Get a logger inside the richmark namespace.

    Args:
        name: Logger name (typically __name__); names outside the
            namespace get the ``richmark.`` prefix

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'richmark.mymodule'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
