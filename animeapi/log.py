"""Logging configuration for animeapi using loguru.

Use get_logger() to get a logger bound to the calling module.
"""

from __future__ import annotations

import sys

from loguru import logger as _base_logger

_initialized = False


def configure_logging(level: str | None = None) -> None:
    """Replace loguru's default handler with a single stderr sink."""
    global _initialized

    if _initialized:
        return

    from animeapi.config import settings

    _base_logger.remove()
    _base_logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <8}</level> | <cyan>{extra[name]}</cyan> - <level>{message}</level>",
        level=level or settings.log_level,
    )
    _initialized = True


def get_logger(name: str):
    if not _initialized:
        configure_logging()
    return _base_logger.bind(name=name)
