"""Common type definitions for ormcore."""

from enum import Enum
from typing import Any, TypeAlias

DatabaseParamType: TypeAlias = dict[str, Any] | list[Any] | tuple[Any, ...] | None


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class Dialect(str, Enum):
    """SQL dialect families with distinct DDL and operator behavior."""

    GENERIC = "generic"
    SQLITE = "sqlite"
    POSTGRES = "postgresql"

    @classmethod
    def from_name(cls, name: str) -> "Dialect":
        """Resolve a driver or backend name (e.g. ``pgsql``) to a dialect."""
        normalized = name.lower().split("+")[0]
        if normalized in ("sqlite", "sqlite3"):
            return cls.SQLITE
        if normalized in ("postgres", "postgresql", "pgsql", "psycopg", "psycopg2"):
            return cls.POSTGRES
        return cls.GENERIC


class ParamStyle(str, Enum):
    """DB-API parameter styles supported by the binder."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    FORMAT = "format"
    PYFORMAT = "pyformat"

    def placeholder(self, position: int) -> str:
        """Return the placeholder token for a 1-based parameter position."""
        if self is ParamStyle.QMARK:
            return "?"
        if self is ParamStyle.NUMERIC:
            return f":{position}"
        return "%s"
