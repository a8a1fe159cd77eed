"""Global pytest configuration and fixtures."""

from collections.abc import Generator
from logging import Logger
from pathlib import Path

import pytest

from ormcore import setup_test_logging
from ormcore.database import SQLiteConnection
from ormcore.query import ParameterBinder
from ormcore.schema import EntityMetadata


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    from ormcore import get_logger

    return get_logger("test")


@pytest.fixture
def binder() -> ParameterBinder:
    """Fresh positional binder."""
    return ParameterBinder()


@pytest.fixture
def sqlite_path(tmp_path: Path) -> Path:
    """Path of a throwaway SQLite database file."""
    return tmp_path / "ormcore_test.db"


@pytest.fixture
def sqlite_connection(sqlite_path: Path) -> Generator[SQLiteConnection, None, None]:
    """Connected SQLite connection on a temporary database file."""
    connection = SQLiteConnection(sqlite_path)
    connection.connect()
    yield connection
    connection.disconnect()


@pytest.fixture
def user_entity() -> EntityMetadata:
    """Users entity with a serial id and a unique email."""
    return EntityMetadata(
        "users",
        {
            "id": {"type": "integer", "serial": True},
            "email": {"type": "string", "required": True, "unique": True},
        },
    )


@pytest.fixture
def post_entity() -> EntityMetadata:
    """Posts entity covering defaults, aliases and a composite index."""
    return EntityMetadata(
        "posts",
        {
            "id": {"type": "integer", "serial": True},
            "title": {"type": "string", "required": True, "index": "author_title"},
            "body": {"type": "text"},
            "status": {"type": "integer", "default": 0, "index": True},
            "author_id": {
                "type": "integer",
                "column": "author",
                "index": "author_title",
            },
            "is_public": {"type": "boolean", "default": False},
        },
    )
