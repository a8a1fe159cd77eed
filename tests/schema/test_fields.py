"""Tests for field definitions."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from ormcore.schema import FieldDefinition, FieldType


def test_field_defaults() -> None:
    """Test defaults of a bare field."""
    field = FieldDefinition(name="title")

    assert field.type == FieldType.STRING
    assert field.length == 255
    assert field.column_name == "title"
    assert field.not_null is False
    assert field.unique is False
    assert field.index is False


def test_decimal_defaults() -> None:
    """Test decimal precision and scale defaults."""
    field = FieldDefinition(name="price", type="decimal")

    assert field.precision == 10
    assert field.scale == 2


def test_explicit_length_kept() -> None:
    """Test declared options win over type defaults."""
    field = FieldDefinition(name="code", type=FieldType.STRING, length=12)

    assert field.length == 12


def test_serial_implies_primary_autoincrement() -> None:
    """Test serial sets primary and autoincrement."""
    field = FieldDefinition(name="id", type="integer", serial=True)

    assert field.primary is True
    assert field.autoincrement is True
    assert field.not_null is True


def test_required_implies_not_null() -> None:
    """Test required fields are NOT NULL unless overridden."""
    assert FieldDefinition(name="email", required=True).not_null is True
    assert FieldDefinition(name="email", required=True, notnull=False).not_null is False
    assert FieldDefinition(name="email", notnull=True).not_null is True


def test_column_alias() -> None:
    """Test the storage column can differ from the field name."""
    field = FieldDefinition(name="author_id", type="integer", column="author")

    assert field.column_name == "author"


def test_callable_default_not_stored() -> None:
    """Test computed defaults are never storage defaults."""
    field = FieldDefinition(name="created", type="datetime", default=datetime.now)

    assert field.storage_default is None
    assert FieldDefinition(name="status", default="draft").storage_default == "draft"


def test_invalid_type_rejected() -> None:
    """Test unknown field types fail validation."""
    with pytest.raises(ValidationError):
        FieldDefinition(name="x", type="uuid-ish")


def test_index_list_rejects_false() -> None:
    """Test index lists cannot contain False."""
    with pytest.raises(ValidationError):
        FieldDefinition(name="x", index=[True, False])
