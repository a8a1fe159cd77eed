"""Entity-level facade over schema migration and CRUD statements."""

from collections.abc import Mapping
from typing import Any

from ormcore.config import settings
from ormcore.database.interfaces import DatabaseConnection
from ormcore.exceptions import UnknownFieldError
from ormcore.log import get_logger
from ormcore.migration import MigrationExecutor, MigrationPlan, SchemaRenderer, diff
from ormcore.query import SQLQueryBuilder
from ormcore.schema import EntityMetadata, TableSchema, build_schema

logger = get_logger(__name__)


class Resolver:
    """Migrates entity tables and runs CRUD statements for entities.

    Data and conditions use entity field names, which are mapped to the
    storage column names on the way in and back on the way out.
    """

    def __init__(
        self,
        connection: DatabaseConnection,
        quote_identifiers: bool | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            connection: Connected database connection
            quote_identifiers: Quote identifiers in DDL; defaults to
                ``settings.quote_identifiers``
        """
        self.connection = connection
        if quote_identifiers is None:
            quote_identifiers = settings.quote_identifiers
        self.renderer = SchemaRenderer.for_dialect(
            connection.dialect, quote_identifiers
        )
        self.executor = MigrationExecutor(connection, self.renderer)

    def _builder(self, entity: EntityMetadata) -> SQLQueryBuilder:
        return SQLQueryBuilder(
            self.connection.dialect,
            self.connection.param_style,
            columns=entity.column_map(),
        )

    @staticmethod
    def _table_name(entity_or_table: EntityMetadata | str) -> str:
        if isinstance(entity_or_table, EntityMetadata):
            return entity_or_table.table
        return entity_or_table

    def _to_columns(
        self, entity: EntityMetadata, data: Mapping[str, Any]
    ) -> dict[str, Any]:
        columns = entity.column_map()
        row: dict[str, Any] = {}
        for field, value in data.items():
            if field not in columns:
                raise UnknownFieldError(
                    f"Unknown field '{field}' for entity '{entity.table}'"
                )
            row[columns[field]] = value
        return row

    def _to_fields(
        self, entity: EntityMetadata, row: Mapping[str, Any]
    ) -> dict[str, Any]:
        fields = {column: field for field, column in entity.column_map().items()}
        return {fields.get(column, column): value for column, value in row.items()}

    def _order_item(self, entity: EntityMetadata, item: str) -> str:
        field, _, direction = item.strip().partition(" ")
        columns = entity.column_map()
        if field not in columns:
            raise UnknownFieldError(
                f"Unknown field '{field}' for entity '{entity.table}'"
            )
        direction = direction.strip().upper()
        if direction not in ("", "ASC", "DESC"):
            raise ValueError(f"Invalid sort direction '{direction}' for '{field}'")
        return f"{columns[field]} {direction}".strip()

    def schema(self, entity: EntityMetadata) -> TableSchema:
        """Structural schema of an entity for the connection's dialect."""
        return build_schema(entity, self.connection.dialect)

    def plan(self, entity: EntityMetadata) -> MigrationPlan:
        """Diff the live table of an entity against its declared schema."""
        live = self.connection.introspect(entity.table)
        return diff(live, self.schema(entity))

    def migrate(self, entity: EntityMetadata) -> bool:
        """Bring an entity's table up to date with its declaration.

        Returns:
            True when every statement succeeded

        Raises:
            MigrationFailedError: If a statement fails
        """
        plan = self.plan(entity)
        logger.info(f"Migrating '{entity.table}': {len(plan)} operation(s)")
        return self.executor.migrate(plan)

    def truncate(
        self, entity_or_table: EntityMetadata | str, cascade: bool = False
    ) -> int:
        """Remove every row of an entity's table."""
        return self.executor.truncate(self._table_name(entity_or_table), cascade)

    def drop_table(self, entity_or_table: EntityMetadata | str) -> bool:
        """Drop an entity's table; False if the backend refused."""
        return self.executor.drop_table(self._table_name(entity_or_table))

    def create(self, entity: EntityMetadata, data: Mapping[str, Any]) -> int:
        """Insert one row.

        Fields missing from ``data`` whose default is callable get the
        computed value; static defaults are left to the database.

        Args:
            entity: Entity metadata
            data: Field name to value mapping

        Returns:
            Number of inserted rows
        """
        values = dict(data)
        for name, field in entity.fields().items():
            if name not in values and callable(field.default):
                values[name] = field.default()

        query, params = self._builder(entity).insert(
            entity.table, self._to_columns(entity, values)
        )
        return self.connection.execute(query, params)

    def update(
        self,
        entity: EntityMetadata,
        data: Mapping[str, Any],
        where: Mapping[str, Any] | None = None,
    ) -> int:
        """Update rows matching ``where``; returns the affected row count."""
        query, params = self._builder(entity).update(
            entity.table, self._to_columns(entity, data), where
        )
        return self.connection.execute(query, params)

    def delete(
        self, entity: EntityMetadata, where: Mapping[str, Any] | None = None
    ) -> int:
        """Delete rows matching ``where``; returns the affected row count."""
        query, params = self._builder(entity).delete(entity.table, where)
        return self.connection.execute(query, params)

    def read(
        self,
        entity: EntityMetadata,
        where: Mapping[str, Any] | None = None,
        order_by: list[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        """Select rows as field name to value mappings.

        Args:
            entity: Entity metadata
            where: Conditions in ``{"field operator": value}`` form
            order_by: Field names, optionally followed by ASC or DESC
            limit: Maximum number of rows
            offset: Rows to skip

        Returns:
            Matching rows keyed by field name

        Raises:
            UnknownFieldError: If a condition or ordering names an unknown field
            ValueError: If an ordering direction is not ASC or DESC
        """
        ordering = None
        if order_by:
            ordering = [self._order_item(entity, item) for item in order_by]

        query, params = self._builder(entity).select(
            entity.table,
            where=where,
            order_by=ordering,
            limit=limit,
            offset=offset,
        )
        rows = self.connection.fetch_all(query, params)
        return [self._to_fields(entity, row) for row in rows]

    def count(
        self, entity: EntityMetadata, where: Mapping[str, Any] | None = None
    ) -> int:
        """Count rows matching ``where``."""
        query, params = self._builder(entity).count(entity.table, where)
        row = self.connection.fetch_one(query, params)
        return int(row["count"]) if row else 0
