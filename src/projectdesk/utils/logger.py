"""Logging for the ProjectDesk server and CLI.

Both write to one rotating file under platformdirs' ``user_log_dir``. Every
record carries the process id so lines from a running ``projectdesk serve``
can be told apart from CLI invocations sharing the file. ``serve`` also
mirrors records to stderr.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

_APP_NAME = "projectdesk"
_LOG_FILE = "projectdesk.log"
_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 3

LOG_LEVEL_ENV = "PROJECTDESK_LOG_LEVEL"

_FILE_FORMAT = "%(asctime)s %(levelname)-8s pid=%(process)d %(message)s"
_CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"

_logger: logging.Logger | None = None
_console_handler: logging.Handler | None = None


def level_from_env(default: int = logging.DEBUG) -> int:
    """Level named by ``PROJECTDESK_LOG_LEVEL`` (e.g. ``INFO``), else *default*."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def get_logger() -> logging.Logger:
    """Return the shared ``projectdesk`` logger, creating its file handler once."""
    global _logger
    if _logger is not None:
        return _logger

    log_dir = Path(user_log_dir(_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_dir / _LOG_FILE,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    logger = logging.getLogger(_APP_NAME)
    logger.setLevel(level_from_env())
    if not logger.handlers:
        logger.addHandler(handler)
    logger.propagate = False

    _logger = logger
    return _logger


def enable_console_logging(level: int | None = None) -> None:
    """Mirror records to stderr next to uvicorn's own output. Idempotent."""
    global _console_handler
    if _console_handler is not None:
        return

    handler = logging.StreamHandler()
    handler.setLevel(level if level is not None else level_from_env(logging.INFO))
    handler.setFormatter(logging.Formatter(fmt=_CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    get_logger().addHandler(handler)
    _console_handler = handler
