"""Logging helpers.

Library modules only ever ask for a logger; configuring handlers is left to
the entry point (`app.py`) via `setup_logging()`.

Usage:
------
    from json_schema_resolver.logging_utils import get_logger, setup_logging

    setup_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.debug("Resolving schema...")
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .config import get_settings

ROOT_LOGGER_NAME = "json_schema_resolver"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Optional[str] = None, console_output: bool = True) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : str, optional
        DEBUG, INFO, WARNING or ERROR. Falls back to the configured
        `log_level` setting.
    console_output : bool
        Attach a stderr handler. Without it records are dropped by the
        package logger.
    """
    if level is None:
        level = get_settings().log_level
    log_level = getattr(logging, level.upper(), logging.WARNING)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(log_level)

    if console_output:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.addHandler(handler)
    else:
        logger.addHandler(logging.NullHandler())

    # Avoid duplicate records through the root logger
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the package namespace for the given module name."""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
