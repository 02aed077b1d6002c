"""Logging setup for the Habit Tracker API."""

from __future__ import annotations

import logging

LOGGER_NAME = "habit_api"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = getattr(logging, value.strip().upper(), None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str | None = None, *, force: bool = False) -> logging.Logger:
    """
    Attach a stream handler to the package logger and set its level.

    Safe to call more than once: the handler is only added the first time
    unless ``force`` is given.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_parse_level(level))
    if force:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
