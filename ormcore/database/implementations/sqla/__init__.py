"""SQLAlchemy (any URL) database implementation."""

from .sqlalchemy_connection import SQLAlchemyConnection, SQLAlchemyTransaction

__all__ = ["SQLAlchemyConnection", "SQLAlchemyTransaction"]
