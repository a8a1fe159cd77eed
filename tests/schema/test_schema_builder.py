"""Tests for building structural schemas from entity metadata."""

from ormcore.schema import (
    ColumnDefinition,
    EntityMetadata,
    IndexDefinition,
    build_column,
    build_schema,
)
from ormcore.schema.fields import FieldDefinition
from ormcore.types import Dialect


def test_build_schema_users(user_entity: EntityMetadata) -> None:
    """Test columns, primary key and indexes of a simple entity."""
    schema = build_schema(user_entity)

    assert schema.name == "users"
    assert schema.columns == (
        ColumnDefinition(
            name="id",
            type="INTEGER",
            nullable=False,
            primary_key=True,
            auto_increment=True,
        ),
        ColumnDefinition(name="email", type="VARCHAR", nullable=False, length=255),
    )
    assert schema.primary_key == ("id",)
    assert schema.indexes == (IndexDefinition("users_email", ("email",), True),)


def test_build_schema_keeps_field_order(post_entity: EntityMetadata) -> None:
    """Test columns follow field declaration order with storage names."""
    schema = build_schema(post_entity)

    assert schema.column_names == [
        "id",
        "title",
        "body",
        "status",
        "author",
        "is_public",
    ]
    assert schema.column("status").default == 0
    assert schema.column("is_public").default is False
    assert schema.index("posts_author_title").columns == ("title", "author")


def test_build_schema_is_deterministic(post_entity: EntityMetadata) -> None:
    """Test building twice yields equal schemas."""
    assert build_schema(post_entity) == build_schema(post_entity)


def test_build_schema_without_primary_key() -> None:
    """Test entities without primary fields have an empty primary key."""
    entity = EntityMetadata("logs", {"message": {"type": "text"}})

    assert build_schema(entity).primary_key == ()


def test_dialect_types() -> None:
    """Test semantic types map per dialect."""
    entity = EntityMetadata(
        "samples",
        {
            "id": {"type": "bigint", "serial": True},
            "ratio": {"type": "float"},
            "payload": {"type": "json"},
            "price": {"type": "decimal"},
        },
    )

    sqlite = build_schema(entity, Dialect.SQLITE)
    postgres = build_schema(entity, Dialect.POSTGRES)

    assert sqlite.column("id").type == "INTEGER"
    assert sqlite.column("payload").type == "TEXT"
    assert postgres.column("id").type == "BIGINT"
    assert postgres.column("ratio").type == "DOUBLE PRECISION"
    assert postgres.column("price").type_sql == "NUMERIC(10,2)"


def test_sqlite_drops_autoincrement_on_composite_key() -> None:
    """Test SQLite only autoincrements a single-column primary key."""
    entity = EntityMetadata(
        "pairs",
        {
            "a": {"type": "integer", "primary": True, "autoincrement": True},
            "b": {"type": "integer", "primary": True},
        },
    )

    assert build_schema(entity, Dialect.SQLITE).column("a").auto_increment is False
    assert build_schema(entity).column("a").auto_increment is True


def test_build_column_options() -> None:
    """Test length and precision only apply to their types."""
    text = build_column(FieldDefinition(name="body", type="text", length=10))
    price = build_column(FieldDefinition(name="price", type="decimal", scale=4))

    assert text.length is None
    assert text.nullable is True
    assert price.precision == 10
    assert price.scale == 4
    assert price.type_sql == "DECIMAL(10,4)"
