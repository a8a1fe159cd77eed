"""Entity metadata and structural schema model."""

from .builder import build_column, build_schema
from .definitions import (
    ColumnDefinition,
    IndexDefinition,
    LiveSchema,
    StructuralSchema,
    TableSchema,
)
from .fields import FieldDefinition, FieldType
from .metadata import EntityMetadata, normalize_indexes

__all__ = [
    "ColumnDefinition",
    "EntityMetadata",
    "FieldDefinition",
    "FieldType",
    "IndexDefinition",
    "LiveSchema",
    "StructuralSchema",
    "TableSchema",
    "build_column",
    "build_schema",
    "normalize_indexes",
]
