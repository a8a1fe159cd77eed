"""Structural table schema values."""

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class ColumnDefinition:
    """Database column definition."""

    name: str
    type: str
    nullable: bool = True
    primary_key: bool = False
    default: Any = None
    auto_increment: bool = False
    length: int | None = None
    precision: int | None = None
    scale: int | None = None

    @property
    def type_sql(self) -> str:
        """Backend type with its length or precision, e.g. ``VARCHAR(255)``."""
        if self.precision is not None:
            scale = self.scale if self.scale is not None else 0
            return f"{self.type}({self.precision},{scale})"
        if self.length is not None:
            return f"{self.type}({self.length})"
        return self.type


@dataclass(frozen=True)
class IndexDefinition:
    """Named unique or non-unique index over ordered columns."""

    name: str
    columns: tuple[str, ...]
    unique: bool = False


@dataclass(frozen=True)
class TableSchema:
    """Database table definition.

    An empty ``columns`` tuple stands for a table that does not exist.
    """

    name: str
    columns: tuple[ColumnDefinition, ...] = ()
    primary_key: tuple[str, ...] = ()
    indexes: tuple[IndexDefinition, ...] = ()

    @property
    def exists(self) -> bool:
        """Whether the table has any columns."""
        return bool(self.columns)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def column(self, name: str) -> ColumnDefinition | None:
        """Look up a column by name."""
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def index(self, name: str) -> IndexDefinition | None:
        """Look up an index by name."""
        for index in self.indexes:
            if index.name == name:
                return index
        return None


# Derived from entity declarations
StructuralSchema: TypeAlias = TableSchema
# Introspected from the backend
LiveSchema: TypeAlias = TableSchema
