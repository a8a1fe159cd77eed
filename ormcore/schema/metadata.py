"""Entity metadata provider and index normalization."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ormcore.exceptions import MetadataValidationError
from ormcore.schema.definitions import IndexDefinition
from ormcore.schema.fields import FieldDefinition, IndexAttribute


def _coerce_field(
    name: str, options: FieldDefinition | Mapping[str, Any]
) -> FieldDefinition:
    if isinstance(options, FieldDefinition):
        if options.name != name:
            raise MetadataValidationError(
                f"Field declared as '{name}' is named '{options.name}'"
            )
        return options
    try:
        return FieldDefinition(name=name, **options)
    except ValidationError as e:
        raise MetadataValidationError(
            f"Invalid definition for field '{name}': {e}"
        ) from e


def _index_names(table: str, column: str, attribute: IndexAttribute) -> list[str]:
    entries = attribute if isinstance(attribute, list) else [attribute]
    names: list[str] = []
    for entry in entries:
        if entry is True:
            name = f"{table}_{column}"
        elif isinstance(entry, str) and entry:
            name = f"{table}_{entry}"
        else:
            continue
        if name not in names:
            names.append(name)
    return names


def normalize_indexes(
    table: str, fields: Iterable[FieldDefinition]
) -> list[IndexDefinition]:
    """Group field ``unique``/``index`` attributes into canonical indexes.

    ``True`` gives a single-column index named ``{table}_{column}``; a string
    names a composite group ``{table}_{name}`` shared by every field using
    it; a list applies each entry. Member columns follow field order.

    Raises:
        MetadataValidationError: If a unique and a non-unique index resolve
            to the same name
    """
    groups: dict[str, tuple[bool, list[str]]] = {}

    for field in fields:
        column = field.column_name
        for unique, attribute in ((True, field.unique), (False, field.index)):
            for name in _index_names(table, column, attribute):
                existing = groups.get(name)
                if existing is None:
                    groups[name] = (unique, [column])
                elif existing[0] != unique:
                    raise MetadataValidationError(
                        f"Index name '{name}' is used by both a unique and "
                        "a non-unique index"
                    )
                elif column not in existing[1]:
                    existing[1].append(column)

    return [
        IndexDefinition(name=name, columns=tuple(columns), unique=unique)
        for name, (unique, columns) in groups.items()
    ]


class EntityMetadata:
    """Resolved field and index metadata of one entity."""

    def __init__(
        self,
        table: str,
        fields: Mapping[str, FieldDefinition | Mapping[str, Any]],
    ) -> None:
        """Initialize entity metadata.

        Args:
            table: Storage table name
            fields: Field name to FieldDefinition (or its options) in
                declaration order

        Raises:
            MetadataValidationError: If the table or fields are invalid
        """
        if not table:
            raise MetadataValidationError("Entity must have a table defined")
        if not fields:
            raise MetadataValidationError(
                f"Entity '{table}' must have at least one field defined"
            )

        self.table = table
        self._fields = {
            name: _coerce_field(name, options) for name, options in fields.items()
        }

        autoincrement = [f.name for f in self._fields.values() if f.autoincrement]
        if len(autoincrement) > 1:
            raise MetadataValidationError(
                f"Entity '{table}' has multiple autoincrement fields: {autoincrement}"
            )

        self._indexes = normalize_indexes(table, self._fields.values())

    def fields(self) -> dict[str, FieldDefinition]:
        """Field definitions in declaration order."""
        return dict(self._fields)

    def column_map(self) -> dict[str, str]:
        """Field name to storage column name."""
        return {name: field.column_name for name, field in self._fields.items()}

    def primary_key(self) -> list[str]:
        """Storage columns of the primary key, in field order."""
        return [f.column_name for f in self._fields.values() if f.primary]

    def indexes(self) -> list[IndexDefinition]:
        """Canonical index definitions."""
        return list(self._indexes)

    def field_keys(self) -> dict[str, Any]:
        """Index summary: primary columns plus unique and plain index groups."""
        return {
            "primary": self.primary_key(),
            "unique": {i.name: list(i.columns) for i in self._indexes if i.unique},
            "index": {i.name: list(i.columns) for i in self._indexes if not i.unique},
        }

    def __repr__(self) -> str:
        return f"EntityMetadata(table={self.table!r}, fields={list(self._fields)})"
