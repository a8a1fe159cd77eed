"""SQLite database connection implementation."""

import re
import sqlite3
from pathlib import Path
from typing import Any

from ormcore.database.interfaces import DatabaseConnection, DatabaseTransaction
from ormcore.log import get_logger, get_sql_logger
from ormcore.schema.definitions import ColumnDefinition, IndexDefinition, TableSchema
from ormcore.schema.types import parse_column_type, parse_default
from ormcore.types import DatabaseParamType, Dialect, ParamStyle

logger = get_logger(__name__)

MEMORY_DATABASE = ":memory:"


def _regexp(pattern: str, value: Any) -> bool:
    """REGEXP implementation; SQLite calls it as regexp(pattern, value)."""
    if pattern is None or value is None:
        return False
    return re.search(pattern, str(value)) is not None


def _quote(identifier: str) -> str:
    escaped = identifier.replace('"', '""')
    return f'"{escaped}"'


class SQLiteConnection(DatabaseConnection):
    """SQLite database connection implementation.

    The underlying connection runs in autocommit mode; ``transaction()``
    issues explicit BEGIN/COMMIT/ROLLBACK.
    """

    dialect = Dialect.SQLITE
    param_style = ParamStyle.QMARK

    def __init__(self, db_path: Path | str = MEMORY_DATABASE, echo: bool = False):
        """Initialize SQLite connection.

        Args:
            db_path: Path to SQLite database file, or ``:memory:``
            echo: Log every executed statement
        """
        self.db_path = db_path if str(db_path) == MEMORY_DATABASE else Path(db_path)
        self.echo = echo
        self._connection: sqlite3.Connection | None = None

    def connect(self) -> None:
        """Establish SQLite database connection."""
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._connection = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=60.0,
                isolation_level=None,
            )
            self._connection.row_factory = sqlite3.Row
            self._connection.create_function("REGEXP", 2, _regexp, deterministic=True)
            self._configure_connection()
            logger.info(f"Connected to SQLite: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to connect to SQLite database: {e}")
            raise

    def disconnect(self) -> None:
        """Close SQLite database connection."""
        if self._connection:
            self._connection.close()
            self._connection = None
            logger.info("Disconnected from SQLite")

    def _cursor(self, query: str, params: DatabaseParamType) -> sqlite3.Cursor:
        if not self._connection:
            raise RuntimeError("Database not connected")
        if self.echo:
            get_sql_logger().info(f"{query} {list(params) if params else []}")
        cursor = self._connection.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        return cursor

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Statement parameters

        Returns:
            Number of affected rows
        """
        try:
            return self._cursor(query, params).rowcount
        except sqlite3.Error as e:
            logger.error(f"Query execution failed: {e}")
            raise

    def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        """Fetch single row.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            Single row as dictionary or None
        """
        try:
            row = self._cursor(query, params).fetchone()
            if row:
                return dict(row)
            return None
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {e}")
            raise

    def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        """Fetch all rows.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            List of rows as dictionaries
        """
        try:
            rows = self._cursor(query, params).fetchall()
            return [dict(row) for row in rows]
        except sqlite3.Error as e:
            logger.error(f"Fetch all failed: {e}")
            raise

    def introspect(self, table: str) -> TableSchema:
        """Read a table definition from sqlite_master and PRAGMAs.

        Indexes SQLite creates for PRIMARY KEY and UNIQUE constraints are
        left out; only explicitly created indexes are reported.

        Args:
            table: Table name

        Returns:
            Live table schema; without columns when the table does not exist
        """
        master = self.fetch_one(
            "SELECT sql FROM sqlite_master WHERE type='table' AND name=?", [table]
        )
        if master is None:
            return TableSchema(name=table)

        info = self.fetch_all(f"PRAGMA table_info({_quote(table)})")
        primary_key = tuple(
            row["name"] for row in sorted(info, key=lambda r: r["pk"]) if row["pk"]
        )
        autoincrement = (
            len(primary_key) == 1 and "AUTOINCREMENT" in (master["sql"] or "").upper()
        )

        columns = []
        for row in info:
            type_name, length, precision, scale = parse_column_type(row["type"])
            is_primary = row["name"] in primary_key
            auto_increment = autoincrement and is_primary
            default = None if auto_increment else parse_default(row["dflt_value"])
            columns.append(
                ColumnDefinition(
                    name=row["name"],
                    type=type_name,
                    nullable=not row["notnull"] and not is_primary,
                    primary_key=is_primary,
                    default=default,
                    auto_increment=auto_increment,
                    length=length,
                    precision=precision,
                    scale=scale,
                )
            )

        indexes = []
        for index_row in self.fetch_all(f"PRAGMA index_list({_quote(table)})"):
            if index_row["origin"] != "c":
                continue
            name = index_row["name"]
            index_info = self.fetch_all(f"PRAGMA index_info({_quote(name)})")
            indexes.append(
                IndexDefinition(
                    name=name,
                    columns=tuple(
                        r["name"] for r in sorted(index_info, key=lambda r: r["seqno"])
                    ),
                    unique=bool(index_row["unique"]),
                )
            )

        return TableSchema(
            name=table,
            columns=tuple(columns),
            primary_key=primary_key,
            indexes=tuple(sorted(indexes, key=lambda i: i.name)),
        )

    def transaction(self) -> DatabaseTransaction:
        """Create a database transaction.

        Returns:
            Database transaction instance
        """
        if not self._connection:
            raise RuntimeError("Database not connected")
        return SQLiteTransaction(self._connection)

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None

    def _configure_connection(self) -> None:
        """Configure SQLite connection settings."""
        if not self._connection:
            return

        self._connection.execute("PRAGMA journal_mode = DELETE")
        self._connection.execute("PRAGMA synchronous = NORMAL")
        self._connection.execute("PRAGMA foreign_keys = ON")
        self._connection.execute("PRAGMA busy_timeout = 90000")


class SQLiteTransaction(DatabaseTransaction):
    """SQLite database transaction implementation."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        """Initialize SQLite transaction.

        Args:
            connection: SQLite connection in autocommit mode
        """
        self._connection = connection

    def begin(self) -> None:
        """Begin the transaction."""
        self._connection.execute("BEGIN")

    def commit(self) -> None:
        """Commit the transaction."""
        self._connection.execute("COMMIT")

    def rollback(self) -> None:
        """Rollback the transaction."""
        logger.warning("Rolling back SQLite transaction")
        self._connection.execute("ROLLBACK")
