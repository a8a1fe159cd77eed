"""Render migration plans into dialect-specific DDL statements."""

from ormcore.migration.differ import type_differs
from ormcore.migration.operations import (
    AddColumn,
    AddIndex,
    CreateTable,
    DropColumn,
    DropIndex,
    MigrationOperation,
    MigrationPlan,
    ModifyColumn,
)
from ormcore.schema.definitions import ColumnDefinition, IndexDefinition, TableSchema
from ormcore.schema.types import default_key, render_default
from ormcore.types import Dialect


class SchemaRenderer:
    """Renders schema changes as SQL for a generic (MySQL-flavoured) backend.

    Subclasses override the statements whose syntax differs per backend.
    """

    dialect = Dialect.GENERIC
    quote_char = "`"

    def __init__(self, quote_identifiers: bool = True) -> None:
        """Initialize the renderer.

        Args:
            quote_identifiers: Wrap table, column and index names in
                ``quote_char``
        """
        self.quote_identifiers = quote_identifiers

    @classmethod
    def for_dialect(
        cls, dialect: Dialect, quote_identifiers: bool = True
    ) -> "SchemaRenderer":
        """Create the renderer matching ``dialect``."""
        renderers: dict[Dialect, type[SchemaRenderer]] = {
            Dialect.GENERIC: SchemaRenderer,
            Dialect.SQLITE: SQLiteSchemaRenderer,
            Dialect.POSTGRES: PostgresSchemaRenderer,
        }
        return renderers[dialect](quote_identifiers)

    def quote(self, identifier: str) -> str:
        if not self.quote_identifiers:
            return identifier
        q = self.quote_char
        return f"{q}{identifier.replace(q, q * 2)}{q}"

    def _column_list(self, columns: tuple[str, ...] | list[str]) -> str:
        return ", ".join(self.quote(column) for column in columns)

    def autoincrement_sql(self, column: ColumnDefinition) -> str:
        return "AUTO_INCREMENT"

    def column_sql(self, column: ColumnDefinition) -> str:
        """Column definition as used in CREATE TABLE and ADD COLUMN.

        Args:
            column: Column definition

        Returns:
            Column definition SQL, without primary key constraints
        """
        col_def = f"{self.quote(column.name)} {column.type_sql}"

        if not column.nullable:
            col_def += " NOT NULL"

        if column.auto_increment:
            col_def += f" {self.autoincrement_sql(column)}"
        elif column.default is not None:
            col_def += f" DEFAULT {render_default(column.default)}"

        return col_def

    def create_table_sql(self, table: TableSchema, name: str | None = None) -> str:
        """Generate CREATE TABLE SQL.

        Args:
            table: Table definition
            name: Table name to create instead of ``table.name``

        Returns:
            CREATE TABLE SQL statement
        """
        column_defs = [self.column_sql(col) for col in table.columns]
        if table.primary_key:
            primary_key = self._column_list(table.primary_key)
            column_defs.append(f"PRIMARY KEY ({primary_key})")

        columns_sql = ", ".join(column_defs)
        return f"CREATE TABLE {self.quote(name or table.name)} ({columns_sql})"

    def create_index_sql(self, table_name: str, index: IndexDefinition) -> str:
        """Generate CREATE [UNIQUE] INDEX SQL.

        Args:
            table_name: Name of the table
            index: Index definition

        Returns:
            CREATE INDEX SQL statement
        """
        unique = "UNIQUE " if index.unique else ""
        return (
            f"CREATE {unique}INDEX {self.quote(index.name)} "
            f"ON {self.quote(table_name)} ({self._column_list(index.columns)})"
        )

    def drop_index_sql(self, table_name: str, index: IndexDefinition) -> str:
        return f"DROP INDEX {self.quote(index.name)} ON {self.quote(table_name)}"

    def add_column_sql(self, table_name: str, column: ColumnDefinition) -> str:
        table = self.quote(table_name)
        return f"ALTER TABLE {table} ADD COLUMN {self.column_sql(column)}"

    def drop_column_sql(self, table_name: str, column: ColumnDefinition) -> str:
        table = self.quote(table_name)
        return f"ALTER TABLE {table} DROP COLUMN {self.quote(column.name)}"

    def modify_column_sql(self, operation: ModifyColumn) -> list[str]:
        """Generate statements changing a column to its new definition."""
        return [
            f"ALTER TABLE {self.quote(operation.table)} "
            f"MODIFY COLUMN {self.column_sql(operation.column)}"
        ]

    def drop_primary_key_sql(self, table_name: str) -> str:
        return f"ALTER TABLE {self.quote(table_name)} DROP PRIMARY KEY"

    def add_primary_key_sql(self, table_name: str, columns: tuple[str, ...]) -> str:
        return (
            f"ALTER TABLE {self.quote(table_name)} "
            f"ADD PRIMARY KEY ({self._column_list(columns)})"
        )

    def drop_table_sql(self, table_name: str) -> str:
        return f"DROP TABLE {self.quote(table_name)}"

    def truncate_sql(self, table_name: str, cascade: bool = False) -> str:
        """Generate the statement removing every row of a table."""
        return f"TRUNCATE TABLE {self.quote(table_name)}"

    def render_operation(self, operation: MigrationOperation) -> list[str]:
        """Render a single plan operation."""
        if isinstance(operation, CreateTable):
            return [self.create_table_sql(operation.schema)] + [
                self.create_index_sql(operation.schema.name, index)
                for index in operation.schema.indexes
            ]
        if isinstance(operation, AddColumn):
            return [self.add_column_sql(operation.table, operation.column)]
        if isinstance(operation, DropColumn):
            return [self.drop_column_sql(operation.table, operation.column)]
        if isinstance(operation, ModifyColumn):
            return self.modify_column_sql(operation)
        if isinstance(operation, AddIndex):
            return [self.create_index_sql(operation.table, operation.index)]
        if isinstance(operation, DropIndex):
            return [self.drop_index_sql(operation.table, operation.index)]
        raise TypeError(f"Unknown migration operation: {operation!r}")

    def _primary_key_sql(self, plan: MigrationPlan) -> list[str]:
        """Statements replacing the primary key when a column's flag changed."""
        changed = any(
            isinstance(op, ModifyColumn)
            and op.column.primary_key != op.previous.primary_key
            for op in plan
        )
        if not changed or plan.source is None or plan.target is None:
            return []

        statements: list[str] = []
        if plan.source.primary_key:
            statements.append(self.drop_primary_key_sql(plan.table))
        if plan.target.primary_key:
            statements.append(
                self.add_primary_key_sql(plan.table, plan.target.primary_key)
            )
        return statements

    def render(self, plan: MigrationPlan) -> list[str]:
        """Render a plan into ordered SQL statements.

        Args:
            plan: Migration plan

        Returns:
            Statements to execute in order; empty for an empty plan
        """
        statements: list[str] = []
        primary_key_rendered = False
        for operation in plan:
            if isinstance(operation, AddIndex) and not primary_key_rendered:
                statements.extend(self._primary_key_sql(plan))
                primary_key_rendered = True
            statements.extend(self.render_operation(operation))
        if not primary_key_rendered:
            statements.extend(self._primary_key_sql(plan))
        return statements


class SQLiteSchemaRenderer(SchemaRenderer):
    """SQLite DDL; column changes SQLite cannot alter rebuild the table."""

    dialect = Dialect.SQLITE
    quote_char = '"'

    def autoincrement_sql(self, column: ColumnDefinition) -> str:
        return "PRIMARY KEY AUTOINCREMENT"

    def _inline_primary_key(self, table: TableSchema) -> bool:
        if len(table.primary_key) != 1:
            return False
        column = table.column(table.primary_key[0])
        return column is not None and column.auto_increment

    def column_sql(self, column: ColumnDefinition) -> str:
        col_def = f"{self.quote(column.name)} {column.type_sql}"

        if not column.nullable:
            col_def += " NOT NULL"

        # Only an INTEGER PRIMARY KEY may autoincrement
        if column.auto_increment and column.primary_key:
            col_def += f" {self.autoincrement_sql(column)}"
        elif column.default is not None:
            col_def += f" DEFAULT {render_default(column.default)}"

        return col_def

    def create_table_sql(self, table: TableSchema, name: str | None = None) -> str:
        column_defs = [self.column_sql(col) for col in table.columns]
        if table.primary_key and not self._inline_primary_key(table):
            primary_key = self._column_list(table.primary_key)
            column_defs.append(f"PRIMARY KEY ({primary_key})")

        columns_sql = ", ".join(column_defs)
        return f"CREATE TABLE {self.quote(name or table.name)} ({columns_sql})"

    def drop_index_sql(self, table_name: str, index: IndexDefinition) -> str:
        return f"DROP INDEX {self.quote(index.name)}"

    def truncate_sql(self, table_name: str, cascade: bool = False) -> str:
        return f"DELETE FROM {self.quote(table_name)}"

    def needs_rebuild(self, plan: MigrationPlan) -> bool:
        """Whether the plan holds a change SQLite cannot apply with ALTER TABLE."""
        for operation in plan:
            if isinstance(operation, ModifyColumn):
                return True
            if isinstance(operation, AddColumn):
                column = operation.column
                if column.primary_key or (
                    not column.nullable and column.default is None
                ):
                    return True
            if isinstance(operation, DropColumn) and operation.column.primary_key:
                return True
        return False

    def rebuild_sql(self, source: TableSchema, target: TableSchema) -> list[str]:
        """Recreate a table with the target definition, keeping its rows.

        Creates a temporary table, copies the columns both definitions
        share, drops the original, renames the copy and recreates indexes.
        Foreign key enforcement is off for the duration so dropping the
        original does not cascade into referencing tables.

        Args:
            source: Live definition of the table
            target: Definition to rebuild into

        Returns:
            Ordered rebuild statements
        """
        table = target.name
        temp = f"_ormcore_rebuild_{table}"
        common = [name for name in target.column_names if source.column(name)]

        statements = [
            "PRAGMA foreign_keys = OFF",
            self.create_table_sql(target, name=temp),
        ]
        if common:
            columns = self._column_list(common)
            statements.append(
                f"INSERT INTO {self.quote(temp)} ({columns}) "
                f"SELECT {columns} FROM {self.quote(table)}"
            )
        statements.append(self.drop_table_sql(table))
        statements.append(
            f"ALTER TABLE {self.quote(temp)} RENAME TO {self.quote(table)}"
        )
        statements.extend(
            self.create_index_sql(table, index) for index in target.indexes
        )
        statements.append("PRAGMA foreign_keys = ON")
        return statements

    def render(self, plan: MigrationPlan) -> list[str]:
        if plan.source is not None and plan.target is not None:
            if plan.source.exists and self.needs_rebuild(plan):
                return self.rebuild_sql(plan.source, plan.target)
        return [
            statement
            for operation in plan
            for statement in self.render_operation(operation)
        ]


class PostgresSchemaRenderer(SchemaRenderer):
    """PostgreSQL DDL with identity columns."""

    dialect = Dialect.POSTGRES
    quote_char = '"'

    def autoincrement_sql(self, column: ColumnDefinition) -> str:
        return "GENERATED BY DEFAULT AS IDENTITY"

    def drop_index_sql(self, table_name: str, index: IndexDefinition) -> str:
        return f"DROP INDEX {self.quote(index.name)}"

    def modify_column_sql(self, operation: ModifyColumn) -> list[str]:
        column = operation.column
        previous = operation.previous
        name = self.quote(column.name)
        actions: list[str] = []

        if type_differs(previous, column):
            actions.append(f"ALTER COLUMN {name} TYPE {column.type_sql}")

        if column.nullable != previous.nullable:
            change = "DROP" if column.nullable else "SET"
            actions.append(f"ALTER COLUMN {name} {change} NOT NULL")

        if column.auto_increment != previous.auto_increment:
            if column.auto_increment:
                actions.append(
                    f"ALTER COLUMN {name} ADD {self.autoincrement_sql(column)}"
                )
            else:
                actions.append(f"ALTER COLUMN {name} DROP IDENTITY IF EXISTS")

        default_changed = default_key(column.default) != default_key(previous.default)
        if not column.auto_increment and default_changed:
            if column.default is None:
                actions.append(f"ALTER COLUMN {name} DROP DEFAULT")
            else:
                actions.append(
                    f"ALTER COLUMN {name} SET DEFAULT {render_default(column.default)}"
                )

        if not actions:
            return []
        return [f"ALTER TABLE {self.quote(operation.table)} {', '.join(actions)}"]

    def drop_primary_key_sql(self, table_name: str) -> str:
        constraint = self.quote(f"{table_name}_pkey")
        return f"ALTER TABLE {self.quote(table_name)} DROP CONSTRAINT {constraint}"

    def truncate_sql(self, table_name: str, cascade: bool = False) -> str:
        statement = f"TRUNCATE TABLE {self.quote(table_name)}"
        if cascade:
            statement += " CASCADE"
        return statement
