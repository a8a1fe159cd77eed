"""Logging configuration for ormcore."""

import logging
import logging.handlers
import sys
from pathlib import Path

import colorlog

from ormcore.config import Settings
from ormcore.types import Environment

BASE_LOG_FORMAT = (
    "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

# Executed statements are echoed here when echo is enabled
SQL_LOGGER_NAME = "ormcore.sql"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(
    level: int | str = logging.INFO,
    format_string: str | None = None,
    use_colors: bool = True,
    log_file: Path | None = None,
    rotate: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level to use
        format_string: Custom format string for console messages
        use_colors: Whether to use colored output for console
        log_file: Also write plain-format records to this file
        rotate: Rotate ``log_file`` instead of overwriting it per run
    """
    if format_string is None:
        format_string = _console_format(use_colors)

    handlers = [_console_handler(format_string, use_colors)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_file, rotate))

    logging.basicConfig(level=level, handlers=handlers, force=True)


def setup_logging_from_settings(settings: Settings) -> None:
    """Configure logging for the environment described by ``settings``.

    Production writes a rotating ``logs/ormcore.log``; testing overwrites
    ``logs/test/test.log``; development logs to the console only.
    """
    log_file = None
    if settings.environment == Environment.PRODUCTION:
        log_file = Path("logs", "ormcore.log")
    elif settings.environment == Environment.TESTING:
        log_file = Path("logs", "test", "test.log")

    setup_logging(
        level=settings.log_level,
        log_file=log_file,
        rotate=settings.environment != Environment.TESTING,
    )
    logging.getLogger(SQL_LOGGER_NAME).setLevel(
        logging.INFO if settings.echo_sql else logging.WARNING
    )


def _console_format(use_colors: bool) -> str:
    if use_colors:
        return (
            "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
            "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
        )
    return BASE_LOG_FORMAT


def _console_handler(format_string: str, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    if use_colors:
        formatter: logging.Formatter = colorlog.ColoredFormatter(
            format_string, datefmt=DATE_FORMAT, log_colors=LOG_COLORS, style="%"
        )
    else:
        formatter = logging.Formatter(format_string, datefmt=DATE_FORMAT)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_file: Path, rotate: bool) -> logging.Handler:
    handler: logging.Handler
    if rotate:
        handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=4,
            encoding="utf-8",
        )
    else:
        handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(BASE_LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def get_sql_logger() -> logging.Logger:
    """Logger that echoes executed SQL statements."""
    return logging.getLogger(SQL_LOGGER_NAME)


def setup_test_logging(level: int = logging.DEBUG) -> None:
    """Setup logging for test runs, overwriting the previous run's log.

    Args:
        level: Logging level to use
    """
    setup_logging(level=level, log_file=Path("logs", "test", "test.log"), rotate=False)
