"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.

The level comes from LOG_LEVEL. When LOG_FILE is set, records are also
appended to that file. psycopg2 itself does not log, so only this
project's modules show up in the output.
"""

import logging
import sys

from config import LOG_FILE, LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_initialized = False


def _build_handlers() -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if LOG_FILE:
        handlers.append(logging.FileHandler(LOG_FILE, encoding="utf-8"))
    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _init_logging() -> None:
    """Configure the root logger once."""
    global _initialized
    if _initialized:
        return
    root = logging.getLogger()
    level = logging.getLevelName(LOG_LEVEL)
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    for handler in _build_handlers():
        root.addHandler(handler)
    _initialized = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        A configured logging.Logger.
    """
    _init_logging()
    return logging.getLogger(name)
