"""File logging setup.

The terminal belongs to the browser, so diagnostics go to a rotating log file
under the user log directory instead of stderr. Configuration is idempotent:
only handlers tagged by this module are replaced on reconfiguration.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazydu"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / "lazydu.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2
LEVEL_NAMES: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")

_HANDLER_TAG_ATTR = "_lazydu_handler"


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def parse_level(level: str | int | None) -> int:
    """Map a level name or number to a ``logging`` level, defaulting to WARNING."""
    if isinstance(level, int):
        return level
    if not level:
        return logging.WARNING
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: str | int | None = None, log_file: Path | None = None) -> logging.Logger:
    """Attach a rotating file handler to the ``lazydu`` logger.

    Returns the package logger. When the log file cannot be opened the logger
    keeps a ``NullHandler`` so logging calls stay harmless.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(parse_level(level))
    package_logger.propagate = False

    for handler in list(package_logger.handlers):
        if _is_our_handler(handler):
            package_logger.removeHandler(handler)
            handler.close()

    target = Path(log_file) if log_file is not None else DEFAULT_LOG_PATH
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            target,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    except OSError:
        handler = logging.NullHandler()
    setattr(handler, _HANDLER_TAG_ATTR, True)
    package_logger.addHandler(handler)
    return package_logger


__all__ = ["DEFAULT_LOG_PATH", "LEVEL_NAMES", "configure_logging", "parse_level"]
