"""Migration plan operations."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from ormcore.schema.definitions import ColumnDefinition, IndexDefinition, TableSchema


@dataclass(frozen=True)
class CreateTable:
    schema: TableSchema


@dataclass(frozen=True)
class AddColumn:
    table: str
    column: ColumnDefinition


@dataclass(frozen=True)
class DropColumn:
    table: str
    column: ColumnDefinition


@dataclass(frozen=True)
class ModifyColumn:
    """Change an existing column to ``column``; ``previous`` is the live one."""

    table: str
    column: ColumnDefinition
    previous: ColumnDefinition


@dataclass(frozen=True)
class AddIndex:
    table: str
    index: IndexDefinition


@dataclass(frozen=True)
class DropIndex:
    table: str
    index: IndexDefinition


MigrationOperation: TypeAlias = (
    CreateTable | AddColumn | DropColumn | ModifyColumn | AddIndex | DropIndex
)


@dataclass(frozen=True)
class MigrationPlan:
    """Ordered operations moving ``source`` (live) toward ``target``."""

    table: str
    operations: tuple[MigrationOperation, ...] = ()
    source: TableSchema | None = None
    target: TableSchema | None = None

    def __iter__(self) -> Iterator[MigrationOperation]:
        return iter(self.operations)

    def __len__(self) -> int:
        return len(self.operations)

    @property
    def is_empty(self) -> bool:
        return not self.operations
