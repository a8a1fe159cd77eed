"""Database connections and introspection."""

from .engine import create_connection
from .implementations import (
    SQLAlchemyConnection,
    SQLAlchemyTransaction,
    SQLiteConnection,
    SQLiteTransaction,
)
from .interfaces import DatabaseConnection, DatabaseTransaction

__all__ = [
    "DatabaseConnection",
    "DatabaseTransaction",
    "SQLAlchemyConnection",
    "SQLAlchemyTransaction",
    "SQLiteConnection",
    "SQLiteTransaction",
    "create_connection",
]
