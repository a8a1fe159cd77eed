"""Database implementations module."""

from .sqla import SQLAlchemyConnection, SQLAlchemyTransaction
from .sqlite import SQLiteConnection, SQLiteTransaction

__all__ = [
    "SQLAlchemyConnection",
    "SQLAlchemyTransaction",
    "SQLiteConnection",
    "SQLiteTransaction",
]
