"""Structured logging utilities."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from nurse_assignment.utils.config import get_settings


PACKAGE_LOGGER_NAME = "nurse_assignment"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_stdout_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Route engine logs to stdout under the ``nurse_assignment`` logger.

    The handler is attached once; later calls with an explicit level only
    retune the package logger. Records still propagate to the root logger so
    host servers and pytest's ``caplog`` see them.
    """

    global _stdout_handler
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    if _stdout_handler is None:
        _stdout_handler = logging.StreamHandler(sys.stdout)
        _stdout_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_stdout_handler)
        package_logger.setLevel((level or get_settings().log_level).upper())
    elif level is not None:
        package_logger.setLevel(level.upper())
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger once the package handler is in place."""
    configure_logging()
    return logging.getLogger(name)
