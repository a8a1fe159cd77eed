"""Database connection interface."""

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Any

from ormcore.schema.definitions import TableSchema
from ormcore.types import DatabaseParamType, Dialect, ParamStyle


class DatabaseConnection(ABC):
    """Abstract database connection interface.

    Backend errors are logged and re-raised unchanged by implementations.
    """

    dialect: Dialect = Dialect.GENERIC
    param_style: ParamStyle = ParamStyle.QMARK

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close database connection."""
        pass

    @abstractmethod
    def execute(self, query: str, params: DatabaseParamType = None) -> int:
        """Execute a statement.

        Args:
            query: SQL statement
            params: Statement parameters

        Returns:
            Number of affected rows (-1 when the backend does not report it)
        """
        pass

    @abstractmethod
    def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        """Fetch single row.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            Single row as dictionary or None if not found
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    def introspect(self, table: str) -> TableSchema:
        """Read the live definition of a table.

        Args:
            table: Table name

        Returns:
            Live table schema; without columns when the table does not exist
        """
        pass

    @abstractmethod
    def transaction(self) -> "DatabaseTransaction":
        """Create a transaction context manager.

        Returns:
            Transaction that begins on enter, commits on success and rolls
            back on error
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if connection is active."""
        pass

    def __enter__(self) -> "DatabaseConnection":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()


class DatabaseTransaction(ABC):
    """Abstract database transaction interface."""

    @abstractmethod
    def begin(self) -> None:
        """Begin the transaction."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit the transaction."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Rollback the transaction."""
        pass

    def __enter__(self) -> "DatabaseTransaction":
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
