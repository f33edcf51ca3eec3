"""Logging setup shared by the package modules."""

from __future__ import annotations

import logging
from typing import Optional

from .config import get_settings

PACKAGE_LOGGER = "urlfetch_adapter"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _package_logger(level: Optional[str] = None) -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
        root.propagate = False
    root.setLevel(level.upper() if level else get_settings().log_level)
    return root


def configure_logging(name: Optional[str] = None, level: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace.

    The stream handler is attached once, to the package logger; module loggers
    propagate to it. ``level`` overrides ``URLFETCH_LOG_LEVEL``.
    """

    root = _package_logger(level)
    if not name or name == PACKAGE_LOGGER:
        return root
    if not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
