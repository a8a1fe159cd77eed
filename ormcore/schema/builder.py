"""Build a structural table schema from entity metadata."""

from dataclasses import replace

from ormcore.schema.definitions import ColumnDefinition, TableSchema
from ormcore.schema.fields import FieldDefinition, FieldType
from ormcore.schema.metadata import EntityMetadata
from ormcore.schema.types import column_type
from ormcore.types import Dialect


def build_column(
    field: FieldDefinition, dialect: Dialect = Dialect.GENERIC
) -> ColumnDefinition:
    """Derive the storage column of one field."""
    is_decimal = field.type is FieldType.DECIMAL
    type_name = column_type(field.type, dialect)
    # SQLite only allows AUTOINCREMENT on an INTEGER PRIMARY KEY
    if dialect is Dialect.SQLITE and field.autoincrement:
        type_name = "INTEGER"
    return ColumnDefinition(
        name=field.column_name,
        type=type_name,
        nullable=not field.not_null,
        primary_key=field.primary,
        default=field.storage_default,
        auto_increment=field.autoincrement,
        length=field.length if field.type is FieldType.STRING else None,
        precision=field.precision if is_decimal else None,
        scale=field.scale if is_decimal else None,
    )


def build_schema(
    entity: EntityMetadata, dialect: Dialect = Dialect.GENERIC
) -> TableSchema:
    """Convert entity metadata into a TableSchema.

    Columns keep field declaration order; building the same metadata twice
    yields equal values.

    Args:
        entity: Entity metadata provider
        dialect: Dialect whose column types are used

    Returns:
        Structural schema of the entity's table
    """
    primary_key = tuple(entity.primary_key())
    columns = [build_column(f, dialect) for f in entity.fields().values()]
    if dialect is Dialect.SQLITE:
        # AUTOINCREMENT needs a single-column INTEGER PRIMARY KEY
        columns = [
            replace(c, auto_increment=c.auto_increment and primary_key == (c.name,))
            for c in columns
        ]
    return TableSchema(
        name=entity.table,
        columns=tuple(columns),
        primary_key=primary_key,
        indexes=tuple(entity.indexes()),
    )
