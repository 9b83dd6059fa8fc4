"""
Logging configuration for cidrexpand.

Console logging on stderr, an optional rotating log file, and a counter
for CIDRs rejected during batch expansion.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOG_MAX_BYTES = 10485760  # 10MB
LOG_BACKUP_COUNT = 5

CONSOLE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_FORMAT = ('%(asctime)s | %(levelname)-8s | %(name)-20s | %(module_name)-15s | '
               '%(function_name)-20s | %(lineno)-4d | %(message)s')
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class StructuredFormatter(logging.Formatter):
    """Adds module and function fields for the file log."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, 'module_name'):
            record.module_name = record.module
        if not hasattr(record, 'function_name'):
            record.function_name = record.funcName
        return super().format(record)


def _resolve_level(level: str) -> int:
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Configure the cidrexpand package logger.

    Args:
        level: Level name; unknown names fall back to INFO
        log_file: Also write DEBUG-and-up records to this rotating file

    Returns:
        The package logger
    """
    logger = logging.getLogger("cidrexpand")
    logger.setLevel(_resolve_level(level))
    logger.handlers.clear()

    # stdout carries command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logger.level)
    console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredFormatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


def configure_logging(
    debug: bool = False,
    log_file: str | None = None,
    level: str = "INFO",
) -> logging.Logger:
    """Set up logging from CLI flags; debug overrides level."""
    return setup_logging(level="DEBUG" if debug else level, log_file=log_file)


class ErrorTracker:
    """Counts rejected input by error type and logs each rejection."""

    def __init__(self):
        self.errors: dict[str, int] = {}
        self.logger = logging.getLogger(__name__)

    def log_error(
        self,
        error_type: str,
        message: str,
        context: dict[str, Any] | None = None,
        level: int = logging.ERROR,
    ) -> None:
        self.errors[error_type] = self.errors.get(error_type, 0) + 1

        log_msg = f"{error_type}: {message}"
        if context:
            log_msg += f" | Context: {context}"
        self.logger.log(level, log_msg)

    def get_error_counts(self) -> dict[str, int]:
        return self.errors.copy()

    def reset_counts(self) -> None:
        self.errors.clear()


_error_tracker = ErrorTracker()


def track_error(
    error_type: str,
    message: str,
    context: dict[str, Any] | None = None,
    level: int = logging.ERROR,
) -> None:
    """Record a rejection with the global tracker."""
    _error_tracker.log_error(error_type, message, context, level)


def get_error_stats() -> dict[str, int]:
    return _error_tracker.get_error_counts()


def reset_error_stats() -> None:
    _error_tracker.reset_counts()
