"""Database connection factory."""

from sqlalchemy.engine import make_url

from ormcore.config import settings
from ormcore.database.implementations import SQLAlchemyConnection, SQLiteConnection
from ormcore.database.implementations.sqlite.sqlite_connection import MEMORY_DATABASE
from ormcore.database.interfaces import DatabaseConnection
from ormcore.log import get_logger

logger = get_logger(__name__)

# Drivers served by the stdlib sqlite3 module
_SQLITE_DRIVERS = ("sqlite", "sqlite+pysqlite")


def create_connection(
    database_url: str | None = None, echo: bool | None = None
) -> DatabaseConnection:
    """Create an unconnected database connection for a URL.

    ``sqlite:///path`` and ``sqlite://`` (in-memory) use the sqlite3 backed
    connection; every other URL goes through SQLAlchemy.

    Args:
        database_url: SQLAlchemy-style database URL; defaults to
            ``settings.database_url``
        echo: Log executed SQL; defaults to ``settings.echo_sql``

    Returns:
        Database connection, not yet connected
    """
    url = database_url or settings.database_url
    echo = settings.echo_sql if echo is None else echo
    parsed = make_url(url)
    logger.info(f"Creating database connection for: {parsed.render_as_string()}")

    if parsed.drivername in _SQLITE_DRIVERS:
        return SQLiteConnection(parsed.database or MEMORY_DATABASE, echo=echo)
    return SQLAlchemyConnection(url, echo=echo)
