"""Diff a live table schema against a structural one."""

from ormcore.migration.operations import (
    AddColumn,
    AddIndex,
    CreateTable,
    DropColumn,
    DropIndex,
    MigrationPlan,
    ModifyColumn,
)
from ormcore.schema.definitions import ColumnDefinition, IndexDefinition, TableSchema
from ormcore.schema.types import default_key, normalize_type_name


def type_differs(live: ColumnDefinition, target: ColumnDefinition) -> bool:
    """Whether the column types differ.

    Type names compare case-insensitively and synonym-aware; length,
    precision and scale only when the target declares them.
    """
    if normalize_type_name(live.type) != normalize_type_name(target.type):
        return True
    for attribute in ("length", "precision", "scale"):
        expected = getattr(target, attribute)
        if expected is not None and getattr(live, attribute) != expected:
            return True
    return False


def columns_differ(live: ColumnDefinition, target: ColumnDefinition) -> bool:
    """Whether the live column must be modified to match ``target``.

    Defaults of autoincrement columns are backend-managed and ignored.
    """
    if type_differs(live, target):
        return True
    if live.nullable != target.nullable:
        return True
    if live.primary_key != target.primary_key:
        return True
    if live.auto_increment != target.auto_increment:
        return True
    if target.auto_increment:
        return False
    return default_key(live.default) != default_key(target.default)


def indexes_differ(live: IndexDefinition, target: IndexDefinition) -> bool:
    return live.columns != target.columns or live.unique != target.unique


def diff(live: TableSchema, target: TableSchema) -> MigrationPlan:
    """Plan the operations turning ``live`` into ``target``.

    A table without columns is created in one CreateTable. Otherwise the
    plan is ordered DropIndex, DropColumn, AddColumn, ModifyColumn, AddIndex
    so drops precede adds and columns exist before their indexes. An index
    whose columns or uniqueness changed is dropped and re-added.

    Args:
        live: Schema introspected from the backend
        target: Schema built from entity metadata

    Returns:
        Migration plan; empty when the table is up to date
    """
    table = target.name

    if not live.exists:
        return MigrationPlan(table, (CreateTable(target),), live, target)

    drop_indexes: list[DropIndex] = []
    drop_columns: list[DropColumn] = []
    add_columns: list[AddColumn] = []
    modify_columns: list[ModifyColumn] = []
    add_indexes: list[AddIndex] = []

    for column in live.columns:
        if target.column(column.name) is None:
            drop_columns.append(DropColumn(table, column))

    for column in target.columns:
        current = live.column(column.name)
        if current is None:
            add_columns.append(AddColumn(table, column))
        elif columns_differ(current, column):
            modify_columns.append(ModifyColumn(table, column, current))

    for index in live.indexes:
        if target.index(index.name) is None:
            drop_indexes.append(DropIndex(table, index))

    for index in target.indexes:
        current_index = live.index(index.name)
        if current_index is None:
            add_indexes.append(AddIndex(table, index))
        elif indexes_differ(current_index, index):
            drop_indexes.append(DropIndex(table, current_index))
            add_indexes.append(AddIndex(table, index))

    operations = (
        *drop_indexes,
        *drop_columns,
        *add_columns,
        *modify_columns,
        *add_indexes,
    )
    return MigrationPlan(table, operations, live, target)
