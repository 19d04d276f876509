"""
Logging helpers for protojson.

Modules log through ``logging.getLogger(__name__)``; nothing here runs at
import time. Applications that want protojson's messages on a stream call
`setup_logging` once.

Notes:
    - The encode/decode hot path never logs. Schema registration, schema
      document loading, catalog construction and settings loading log at
      DEBUG/INFO/WARNING.
    - ``PROTOJSON_LOG_LEVEL`` accepts level names ("DEBUG", "warn") or numbers ("10").
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Final, TextIO

from .constants import ENV_PREFIX

__all__ = [
    "LOGGER_NAME",
    "parse_log_level",
    "resolve_env_log_level",
    "setup_logging",
    "get_logger",
]

LOGGER_NAME: Final[str] = "protojson"
LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s: %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(name)s:%(lineno)d] [%(funcName)s] %(message)s"

_LEVEL_NAMES: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def parse_log_level(value: str) -> int | None:
    """
    Map a level name or decimal number to a logging level (None if unrecognized).

    Examples:
        >>> parse_log_level("warn") == logging.WARNING
        True
        >>> parse_log_level("15")
        15
    """
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level(prefix: str = ENV_PREFIX) -> int | None:
    """
    Return the logging level named by ``<prefix>LOG_LEVEL``, or None.

    Unset, empty and unrecognized values all yield None.
    """
    val = os.environ.get(prefix + "LOG_LEVEL")
    if not val:
        return None
    return parse_log_level(val)


def setup_logging(level: int | str | None = None, stream: TextIO | None = None) -> logging.Logger:
    """
    Attach a single stream handler to the ``protojson`` logger.

    Args:
        level (int | str | None): Logging level or level name; when None,
            ``PROTOJSON_LOG_LEVEL`` is consulted. WARNING is the fallback.
        stream (TextIO | None): Destination stream (default: sys.stderr).

    Returns:
        logging.Logger: The configured ``protojson`` logger.

    Notes:
        Calling it again replaces the previous handler instead of stacking a
        second one. The root logger is left untouched.
    """
    if isinstance(level, str):
        level = parse_log_level(level)
    elif level is None:
        level = resolve_env_log_level()
    if level is None:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``protojson`` namespace (``name`` may already be qualified)."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
