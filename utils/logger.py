"""
utils/logger.py
---------------
Logging setup for the bot and its services.
Every module asks for its logger with `get_logger(__name__)`; the first
call configures stdout output at LOG_LEVEL.
"""

import logging
import sys

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# httpx logs every Telegram poll, matplotlib every font lookup.
_CHATTY_LIBRARIES = ("httpx", "matplotlib")

_configured = False


def level_from_name(name: str) -> int | None:
    """'debug', 'WARNING' or '10' -> logging level; None when unknown."""
    name = str(name).strip().upper()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else None


def _configure() -> None:
    global _configured
    if _configured:
        return
    _configured = True

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root = logging.getLogger()
    root.addHandler(handler)

    level = level_from_name(LOG_LEVEL)
    root.setLevel(logging.INFO if level is None else level)
    for library in _CHATTY_LIBRARIES:
        logging.getLogger(library).setLevel(logging.WARNING)

    if level is None:
        logging.getLogger(__name__).warning(f"Unknown LOG_LEVEL {LOG_LEVEL!r}, using INFO")


def get_logger(name: str) -> logging.Logger:
    """Named logger; pass the calling module's ``__name__``."""
    _configure()
    return logging.getLogger(name)
