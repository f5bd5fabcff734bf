"""Logger construction for client instances."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

LOGGER_PREFIX = "slack_web_client"


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    def to_logging(self) -> int:
        return _LEVELS[self]


_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def get_logger(name: str, level: LogLevel = LogLevel.INFO, existing: Optional[logging.Logger] = None) -> logging.Logger:
    """Return ``existing`` untouched, or the shared logger for ``name`` at ``level``.

    One logger is registered per level, not per client.
    """
    if existing is not None:
        return existing
    level = LogLevel(level)
    logger = logging.getLogger(f"{LOGGER_PREFIX}.{name}.{level.value}")
    logger.setLevel(level.to_logging())
    return logger


__all__ = ["LogLevel", "get_logger", "LOGGER_PREFIX"]
