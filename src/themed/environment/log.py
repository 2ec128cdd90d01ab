"""Logging setup for Themed.

Every module logs through ``logging.getLogger(__name__)``, so all records
land under the ``themed`` logger. This module decides where they go:

- Debug off: the ``themed`` logger is silenced.
- Debug on: records at or above the verbosity threshold are written to a
  rotating log file (1 MiB per file, 5 numbered backups).
- Logger callback: every record is formatted and handed to the callback
  instead, whatever the debug settings.

Verbosity levels (``debug_level``):
    0 -> ERROR
    1 -> WARNING
    2 -> NOTICE (a custom level between INFO and WARNING)
    3 -> INFO
"""

from __future__ import annotations

import logging
import logging.handlers
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themed.environment.config import ThemeConfiguration

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LOGGER_NAME = "themed"
MAX_LOG_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

VERBOSITY_LEVELS: dict[int, int] = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: NOTICE,
    3: logging.INFO,
}

LoggerCallback = Callable[[str], None]


def notice(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log ``msg`` at NOTICE level."""
    logger.log(NOTICE, msg, *args)


def threshold_for(debug_level: int) -> int:
    return VERBOSITY_LEVELS.get(debug_level, logging.INFO if debug_level > 3 else logging.ERROR)


class VerbosityFilter(logging.Filter):
    """Drop records below the level selected by ``debug_level``."""

    def __init__(self, debug_level: int):
        super().__init__()
        self.threshold = threshold_for(debug_level)

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold


class CallbackHandler(logging.Handler):
    """Forward formatted records to a ``callback(message)`` sink."""

    def __init__(self, callback: LoggerCallback):
        super().__init__()
        self.callback = callback

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.callback(self.format(record))
        except Exception:
            self.handleError(record)


def _file_handler(config: ThemeConfiguration) -> logging.Handler:
    config.debug_log.parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        config.debug_log,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
        delay=True,
    )


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        if getattr(handler, "_themed", False):
            logger.removeHandler(handler)
            handler.close()


def configure_logging(
    config: ThemeConfiguration,
    callback: LoggerCallback | None = None,
) -> logging.Logger:
    """Install the handler matching ``config`` on the ``themed`` logger.

    Handlers installed by a previous call are removed first, so the most
    recently configured Theme owns the log destination.

    Args:
        config: Resolved theme configuration
        callback: Optional sink replacing the file handler

    Returns:
        The configured ``themed`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset(logger)

    handler: logging.Handler | None
    if callback is not None:
        handler = CallbackHandler(callback)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.setLevel(logging.DEBUG)
    elif config.debug:
        try:
            handler = _file_handler(config)
        except OSError as e:
            # Fall back to whatever the application configured on the root logger.
            logging.getLogger(__name__).warning("Unable to create log file: %s", e)
            handler = None
        else:
            handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
            handler.addFilter(VerbosityFilter(config.debug_level))
        logger.setLevel(threshold_for(config.debug_level))
    else:
        handler = None
        logger.setLevel(logging.CRITICAL + 1)

    if handler is not None:
        handler._themed = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
