"""Logging configuration."""

import logging
import sys
from typing import Optional

from fitgenius.config.settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _resolve_level(level: Optional[str]) -> int:
    return getattr(logging, (level or settings.log_level).upper(), logging.INFO)


def setup_logger(name: str = __name__, level: Optional[str] = None) -> logging.Logger:
    """Set up a module logger writing to stdout.

    The level defaults to ``settings.log_level``; an unknown level name
    falls back to INFO instead of failing at import time.
    """
    logger = logging.getLogger(name)
    resolved = _resolve_level(level)
    logger.setLevel(resolved)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(resolved)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(handler)

    return logger
