"""Mapping between semantic field types and backend column types."""

import re
from decimal import Decimal
from typing import Any

from ormcore.schema.fields import FieldType
from ormcore.types import Dialect

_GENERIC_TYPES: dict[FieldType, str] = {
    FieldType.INTEGER: "INTEGER",
    FieldType.SMALLINT: "SMALLINT",
    FieldType.BIGINT: "BIGINT",
    FieldType.STRING: "VARCHAR",
    FieldType.TEXT: "TEXT",
    FieldType.BOOLEAN: "BOOLEAN",
    FieldType.FLOAT: "FLOAT",
    FieldType.DECIMAL: "DECIMAL",
    FieldType.DATETIME: "TIMESTAMP",
    FieldType.DATE: "DATE",
    FieldType.TIME: "TIME",
    FieldType.JSON: "JSON",
    FieldType.BINARY: "BLOB",
}

COLUMN_TYPES: dict[Dialect, dict[FieldType, str]] = {
    Dialect.GENERIC: _GENERIC_TYPES,
    Dialect.SQLITE: {
        **_GENERIC_TYPES,
        FieldType.DATETIME: "DATETIME",
        FieldType.JSON: "TEXT",
    },
    Dialect.POSTGRES: {
        **_GENERIC_TYPES,
        FieldType.FLOAT: "DOUBLE PRECISION",
        FieldType.DECIMAL: "NUMERIC",
        FieldType.BINARY: "BYTEA",
    },
}

# Spellings backends report for the same type
TYPE_SYNONYMS: dict[str, str] = {
    "INT": "INTEGER",
    "INT4": "INTEGER",
    "INT2": "SMALLINT",
    "INT8": "BIGINT",
    "SERIAL": "INTEGER",
    "BIGSERIAL": "BIGINT",
    "CHARACTER VARYING": "VARCHAR",
    "BOOL": "BOOLEAN",
    "NUMERIC": "DECIMAL",
    "FLOAT8": "DOUBLE PRECISION",
    "DOUBLE": "DOUBLE PRECISION",
    "TIMESTAMP WITHOUT TIME ZONE": "TIMESTAMP",
    "TIME WITHOUT TIME ZONE": "TIME",
}

_PRECISION_TYPES = {"DECIMAL", "NUMERIC"}

_TYPE_PATTERN = re.compile(
    r"^\s*([A-Za-z][A-Za-z0-9_ ]*?)\s*(?:\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\))?\s*$"
)


def column_type(field_type: FieldType, dialect: Dialect) -> str:
    """Backend column type name for a semantic field type."""
    return COLUMN_TYPES[dialect][field_type]


def normalize_type_name(name: str) -> str:
    """Uppercase, collapse whitespace and resolve synonyms."""
    normalized = " ".join(name.upper().split())
    return TYPE_SYNONYMS.get(normalized, normalized)


def parse_column_type(
    declared: str,
) -> tuple[str, int | None, int | None, int | None]:
    """Split a declared type into (name, length, precision, scale).

    Example:
        >>> parse_column_type("VARCHAR(255)")
        ("VARCHAR", 255, None, None)
        >>> parse_column_type("numeric(10, 2)")
        ("NUMERIC", None, 10, 2)
    """
    match = _TYPE_PATTERN.match(declared or "")
    if match is None:
        return " ".join(declared.upper().split()), None, None, None

    name = " ".join(match.group(1).upper().split())
    first = int(match.group(2)) if match.group(2) else None
    second = int(match.group(3)) if match.group(3) else None

    if normalize_type_name(name) in _PRECISION_TYPES:
        return name, None, first, second
    return name, first, None, None


def render_default(value: Any) -> str:
    """Render a storage default as an SQL literal."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    text = str(value).replace("'", "''")
    return f"'{text}'"


def parse_default(text: str | None) -> Any:
    """Turn an introspected default expression back into a comparable value.

    Quoted literals lose their quotes and any ``::type`` cast, boolean
    keywords become ``bool``; everything else is returned as text.
    """
    if text is None:
        return None
    value = str(text).strip()
    if value.upper() == "NULL":
        return None
    if "::" in value and not value.startswith("nextval("):
        value = value.split("::", 1)[0]
    if value.startswith("(") and value.endswith(")"):
        value = value[1:-1].strip()
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1].replace("''", "'")
    if value.upper() in ("TRUE", "FALSE"):
        return value.upper() == "TRUE"
    return value


def default_key(value: Any) -> str | None:
    """Canonical text of a default so declared and introspected values compare."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
