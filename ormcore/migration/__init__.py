"""Schema diffing, DDL rendering and migration execution."""

from .differ import columns_differ, diff, indexes_differ, type_differs
from .executor import MigrationExecutor
from .operations import (
    AddColumn,
    AddIndex,
    CreateTable,
    DropColumn,
    DropIndex,
    MigrationOperation,
    MigrationPlan,
    ModifyColumn,
)
from .renderer import PostgresSchemaRenderer, SchemaRenderer, SQLiteSchemaRenderer

__all__ = [
    "AddColumn",
    "AddIndex",
    "CreateTable",
    "DropColumn",
    "DropIndex",
    "MigrationExecutor",
    "MigrationOperation",
    "MigrationPlan",
    "ModifyColumn",
    "PostgresSchemaRenderer",
    "SQLiteSchemaRenderer",
    "SchemaRenderer",
    "columns_differ",
    "diff",
    "indexes_differ",
    "type_differs",
]
