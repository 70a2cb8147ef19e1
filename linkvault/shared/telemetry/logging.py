"""Logging configuration for the application."""

import logging
import sys

from linkvault.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """Configure application-wide logging to stdout.

    Level is DEBUG when settings.debug is True, otherwise settings.log_level.
    Cache hits and misses log at DEBUG, invalidations at INFO.
    """
    settings = get_settings()
    level = logging.DEBUG if settings.debug else logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL statements are logged by the engine itself when DATABASE_ECHO is on.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
