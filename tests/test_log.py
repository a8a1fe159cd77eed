"""Unit tests for logging functionality."""

import logging
import logging.handlers
from pathlib import Path
from unittest.mock import patch

import colorlog

from ormcore import (
    Settings,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
    setup_test_logging,
)
from ormcore.log import SQL_LOGGER_NAME, get_sql_logger
from ormcore.types import Environment


def test_setup_logging_defaults() -> None:
    """Test setup_logging with default parameters."""
    setup_logging()
    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert isinstance(root_logger.handlers[0].formatter, colorlog.ColoredFormatter)


def test_setup_logging_custom_level() -> None:
    """Test setup_logging with custom level."""
    setup_logging(level=logging.DEBUG, use_colors=False)
    root_logger = logging.getLogger()
    assert root_logger.level == logging.DEBUG
    assert not isinstance(
        root_logger.handlers[0].formatter, colorlog.ColoredFormatter
    )


def test_file_logging(tmp_path: Path) -> None:
    """Test file logging writes to the given file."""
    log_file = tmp_path / "nested" / "ormcore.log"
    setup_logging(log_file=log_file)
    get_logger("ormcore.test").info("hello file")

    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello file" in log_file.read_text()
    assert isinstance(
        logging.getLogger().handlers[1], logging.handlers.RotatingFileHandler
    )


def test_setup_logging_from_settings() -> None:
    """Test settings drive the level and the SQL echo logger."""
    settings = Settings(
        environment=Environment.DEVELOPMENT, log_level="WARNING", echo_sql=True
    )

    with patch("ormcore.log.setup_logging") as mock_setup:
        setup_logging_from_settings(settings)

    mock_setup.assert_called_once_with(level="WARNING", log_file=None, rotate=True)
    assert logging.getLogger(SQL_LOGGER_NAME).level == logging.INFO


def test_production_logs_to_rotating_file() -> None:
    """Test production settings enable the rotating log file."""
    settings = Settings(environment=Environment.PRODUCTION)

    with patch("ormcore.log.setup_logging") as mock_setup:
        setup_logging_from_settings(settings)

    assert mock_setup.call_args.kwargs["log_file"] == Path("logs", "ormcore.log")
    assert mock_setup.call_args.kwargs["rotate"] is True
    assert logging.getLogger(SQL_LOGGER_NAME).level == logging.WARNING


def test_get_logger() -> None:
    """Test get_logger returns a logger instance."""
    logger = get_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
    assert get_sql_logger().name == SQL_LOGGER_NAME


def teardown_module() -> None:
    """Restore the session's test logging."""
    setup_test_logging()
    logging.getLogger(SQL_LOGGER_NAME).setLevel(logging.NOTSET)
