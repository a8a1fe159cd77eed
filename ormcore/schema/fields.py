"""Declared entity field metadata."""

from enum import Enum
from typing import Any, TypeAlias

from pydantic import BaseModel, Field, field_validator, model_validator

IndexAttribute: TypeAlias = bool | str | list[bool | str]


class FieldType(str, Enum):
    """Semantic field types an entity may declare."""

    INTEGER = "integer"
    SMALLINT = "smallint"
    BIGINT = "bigint"
    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DECIMAL = "decimal"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    JSON = "json"
    BINARY = "binary"


# Applied when the declaration leaves the option unset
TYPE_DEFAULTS: dict[FieldType, dict[str, int]] = {
    FieldType.STRING: {"length": 255},
    FieldType.DECIMAL: {"precision": 10, "scale": 2},
}


class FieldDefinition(BaseModel):
    """A single entity field as declared on the entity."""

    name: str = Field(..., min_length=1)
    type: FieldType = FieldType.STRING
    required: bool = False
    notnull: bool | None = Field(
        default=None, description="Explicit NOT NULL override of required"
    )
    default: Any = Field(
        default=None, description="Storage default, or a callable initial value"
    )
    primary: bool = False
    autoincrement: bool = False
    serial: bool = Field(
        default=False, description="Shorthand for primary + autoincrement"
    )
    length: int | None = Field(default=None, gt=0)
    precision: int | None = Field(default=None, gt=0)
    scale: int | None = Field(default=None, ge=0)
    column: str | None = Field(default=None, description="Storage column name")
    unique: IndexAttribute = False
    index: IndexAttribute = False

    @field_validator("unique", "index")
    @classmethod
    def validate_index_attribute(cls, v: IndexAttribute) -> IndexAttribute:
        """Reject list entries that cannot name an index."""
        if isinstance(v, list) and any(entry is False for entry in v):
            raise ValueError("Index lists may only contain True or index names")
        return v

    @model_validator(mode="after")
    def apply_field_defaults(self) -> "FieldDefinition":
        """Fill derived options: serial flags, column name, type defaults."""
        if self.serial:
            self.primary = True
            self.autoincrement = True
        if not self.column:
            self.column = self.name
        for option, value in TYPE_DEFAULTS.get(self.type, {}).items():
            if getattr(self, option) is None:
                setattr(self, option, value)
        return self

    @property
    def column_name(self) -> str:
        """Storage column name."""
        return self.column or self.name

    @property
    def not_null(self) -> bool:
        """Whether the storage column rejects NULL."""
        if self.primary:
            return True
        if self.notnull is not None:
            return self.notnull
        return self.required

    @property
    def storage_default(self) -> Any:
        """Default rendered into DDL; computed defaults never are."""
        if callable(self.default):
            return None
        return self.default
