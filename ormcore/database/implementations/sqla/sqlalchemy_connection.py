"""SQLAlchemy-backed database connection for any supported URL."""

from typing import Any

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Connection, CursorResult, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from ormcore.database.interfaces import DatabaseConnection, DatabaseTransaction
from ormcore.exceptions import OrmError
from ormcore.log import get_logger
from ormcore.schema.definitions import ColumnDefinition, IndexDefinition, TableSchema
from ormcore.schema.types import parse_column_type, parse_default
from ormcore.types import DatabaseParamType, Dialect, ParamStyle

logger = get_logger(__name__)


class SQLAlchemyConnection(DatabaseConnection):
    """Database connection executing raw SQL through a SQLAlchemy engine.

    Statements go to the DB-API driver unchanged (``exec_driver_sql``), so
    placeholders must follow the driver's paramstyle (see ``param_style``).
    Outside ``transaction()`` every statement is committed on its own.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any) -> None:
        """Initialize SQLAlchemy connection.

        Args:
            url: SQLAlchemy database URL
            echo: Enable SQL echo for debugging
            **engine_kwargs: Additional ``create_engine`` parameters
        """
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.dialect = Dialect.from_name(make_url(url).get_backend_name())
        self._engine: Engine | None = None
        self._connection: Connection | None = None
        self._in_transaction = False

    @property
    def param_style(self) -> ParamStyle:  # type: ignore[override]
        """Placeholder style of the underlying DB-API driver."""
        if self._engine is None:
            raise RuntimeError("Database not connected")
        paramstyle = self._engine.dialect.paramstyle
        try:
            return ParamStyle(paramstyle)
        except ValueError as e:
            raise OrmError(f"Unsupported driver paramstyle: {paramstyle}") from e

    def connect(self) -> None:
        """Create the engine and open a connection."""
        try:
            self._engine = create_engine(self.url, echo=self.echo, **self.engine_kwargs)
            self._connection = self._engine.connect()
            logger.info(f"Connected to {self._engine.url.render_as_string()}")
        except SQLAlchemyError as e:
            logger.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close the connection and dispose of the engine."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Disconnected from database")

    def _run(self, query: str, params: DatabaseParamType) -> CursorResult[Any]:
        if self._connection is None:
            raise RuntimeError("Database not connected")
        if isinstance(params, dict):
            return self._connection.exec_driver_sql(query, params)
        return self._connection.exec_driver_sql(query, tuple(params or ()))

    def _finish(self, failed: bool = False) -> None:
        if self._connection is None or self._in_transaction:
            return
        if failed:
            self._connection.rollback()
        else:
            self._connection.commit()

    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Statement parameters

        Returns:
            Number of affected rows
        """
        try:
            result = self._run(query, params)
            rowcount = result.rowcount
            self._finish()
            return rowcount
        except SQLAlchemyError as e:
            logger.error(f"Query execution failed: {e}")
            self._finish(failed=True)
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
            row = self._run(query, params).mappings().first()
            self._finish()
            return dict(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Fetch one failed: {e}")
            self._finish(failed=True)
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
            rows = self._run(query, params).mappings().all()
            self._finish()
            return [dict(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error(f"Fetch all failed: {e}")
            self._finish(failed=True)
            raise

    def _sqlite_autoincrement(self, table: str) -> bool:
        row = self.fetch_one(
            "SELECT sql FROM sqlite_master WHERE type='table' AND name=?", [table]
        )
        return row is not None and "AUTOINCREMENT" in (row["sql"] or "").upper()

    def introspect(self, table: str) -> TableSchema:
        """Read a table definition with the SQLAlchemy inspector.

        Args:
            table: Table name

        Returns:
            Live table schema; without columns when the table does not exist
        """
        if self._connection is None or self._engine is None:
            raise RuntimeError("Database not connected")

        inspector = inspect(self._connection)
        if not inspector.has_table(table):
            return TableSchema(name=table)

        reflected = inspector.get_columns(table)
        primary_key = tuple(
            inspector.get_pk_constraint(table).get("constrained_columns") or ()
        )
        sqlite_autoincrement = (
            self.dialect is Dialect.SQLITE
            and len(primary_key) == 1
            and self._sqlite_autoincrement(table)
        )

        columns = []
        for column in reflected:
            declared = column["type"].compile(dialect=self._engine.dialect)
            type_name, length, precision, scale = parse_column_type(declared)
            is_primary = column["name"] in primary_key
            raw_default = column.get("default")
            auto_increment = (
                bool(column.get("identity"))
                or str(raw_default or "").startswith("nextval(")
                or (sqlite_autoincrement and is_primary)
            )
            columns.append(
                ColumnDefinition(
                    name=column["name"],
                    type=type_name,
                    nullable=bool(column["nullable"]) and not is_primary,
                    primary_key=is_primary,
                    default=None if auto_increment else parse_default(raw_default),
                    auto_increment=auto_increment,
                    length=length,
                    precision=precision,
                    scale=scale,
                )
            )

        indexes = [
            IndexDefinition(
                name=index["name"],
                columns=tuple(index["column_names"]),
                unique=bool(index["unique"]),
            )
            for index in inspector.get_indexes(table)
            if index["name"] and all(index["column_names"])
        ]

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
        if self._connection is None:
            raise RuntimeError("Database not connected")
        return SQLAlchemyTransaction(self)

    @property
    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self._connection is not None


class SQLAlchemyTransaction(DatabaseTransaction):
    """Transaction over the connection's autobegun SQLAlchemy transaction."""

    def __init__(self, connection: SQLAlchemyConnection) -> None:
        """Initialize transaction.

        Args:
            connection: Owning SQLAlchemy connection
        """
        self.connection = connection

    def _raw(self) -> Connection:
        if self.connection._connection is None:
            raise RuntimeError("Database not connected")
        return self.connection._connection

    def begin(self) -> None:
        """Begin the transaction."""
        raw = self._raw()
        if raw.in_transaction():
            raw.commit()
        self.connection._in_transaction = True

    def commit(self) -> None:
        """Commit the transaction."""
        self.connection._in_transaction = False
        self._raw().commit()

    def rollback(self) -> None:
        """Rollback the transaction."""
        logger.warning("Rolling back transaction")
        self.connection._in_transaction = False
        self._raw().rollback()
