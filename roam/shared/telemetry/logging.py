"""Logging setup for processes that host the search core."""

import logging
import sys

from roam.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log every command at DEBUG.
_NOISY_LOGGERS = ("redis", "asyncio")


def setup_logging(settings: Settings | None = None) -> None:
    """Configure the root logger to write to stdout.

    DEBUG when settings.debug is set, otherwise INFO. Redis and asyncio
    stay at WARNING either way so keystroke-level search logs remain
    readable.
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
