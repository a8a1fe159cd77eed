"""Tests for WHERE clause assembly."""

import pytest

from ormcore.exceptions import (
    ParameterCountError,
    UnknownFieldError,
    UnsupportedOperatorError,
)
from ormcore.query import (
    ParameterBinder,
    build_where_clause,
    compile_condition,
    parse_condition_key,
    where_field_sql,
)
from ormcore.query.where import build_limit_clause, build_order_by_clause


@pytest.mark.parametrize(
    "key,expected",
    [
        ("name", ("name", "=")),
        ("age >=", ("age", ">=")),
        ("  title   :like ", ("title", ":like")),
        ("first name :not", ("first name", ":not")),
    ],
)
def test_parse_condition_key(key: str, expected: tuple[str, str]) -> None:
    """Test condition keys split into column and operator."""
    assert parse_condition_key(key) == expected


def test_parse_condition_key_empty() -> None:
    """Test an empty key is rejected."""
    with pytest.raises(UnknownFieldError):
        parse_condition_key("   ")


def test_build_where_clause_basic() -> None:
    """Test conditions are AND-joined in mapping order."""
    where_clause, params = build_where_clause({"name": "John", "age >": 30})

    assert where_clause == "WHERE name = ? AND age > ?"
    assert params == ["John", 30]


def test_build_where_clause_empty() -> None:
    """Test no conditions produce no clause."""
    assert build_where_clause({}) == ("", [])
    assert build_where_clause(None) == ("", [])


def test_build_where_clause_mixed_operators() -> None:
    """Test list, null and pattern conditions together."""
    where_clause, params = build_where_clause(
        {"id": [1, 2], "deleted_at": None, "title :like": "%orm%"}
    )

    assert where_clause == "WHERE id IN (?, ?) AND deleted_at IS NULL AND title LIKE ?"
    assert params == [1, 2, "%orm%"]


def test_build_where_clause_maps_fields() -> None:
    """Test field names are translated to storage columns."""
    where_clause, params = build_where_clause(
        {"author_id": 7}, columns={"author_id": "author"}
    )

    assert where_clause == "WHERE author = ?"
    assert params == [7]


def test_build_where_clause_unknown_field() -> None:
    """Test undeclared fields are rejected when a column map is given."""
    with pytest.raises(UnknownFieldError) as exc_info:
        build_where_clause({"password": "x"}, columns={"id": "id"})

    assert "Unknown field 'password'" in str(exc_info.value)


def test_build_where_clause_unknown_operator() -> None:
    """Test an unknown operator token surfaces from the compiler."""
    with pytest.raises(UnsupportedOperatorError):
        build_where_clause({"age ~~": 1})


def test_build_where_clause_continues_binder() -> None:
    """Test WHERE parameters follow those already bound."""
    binder = ParameterBinder()
    binder.bind("already")

    where_clause, params = build_where_clause({"id": 3}, binder)

    assert where_clause == "WHERE id = ?"
    assert params == [3]
    assert binder.params == ["already", 3]


def test_compile_condition(binder: ParameterBinder) -> None:
    """Test compiling a single condition."""
    predicate = compile_condition("score <", 10, binder)

    assert predicate.fragment == "score < ?"
    assert predicate.params == (10,)


def test_where_field_sql(binder: ParameterBinder) -> None:
    """Test raw fragments bind each placeholder in order."""
    predicate = where_field_sql("age", "BETWEEN ? AND ?", [18, 65], binder)

    assert predicate.fragment == "age BETWEEN ? AND ?"
    assert predicate.params == (18, 65)


def test_where_field_sql_count_mismatch(binder: ParameterBinder) -> None:
    """Test placeholder and parameter counts must agree."""
    with pytest.raises(ParameterCountError) as exc_info:
        where_field_sql("age", "BETWEEN ? AND ?", [18], binder)

    assert "Number of supplied parameters (1)" in str(exc_info.value)
    assert "placeholders (2)" in str(exc_info.value)


def test_build_order_by_clause() -> None:
    """Test ORDER BY clause building."""
    assert build_order_by_clause(["name", "age DESC"]) == "ORDER BY name, age DESC"
    assert build_order_by_clause(None) == ""


def test_build_limit_clause() -> None:
    """Test LIMIT clause building."""
    assert build_limit_clause(10) == "LIMIT 10"
    assert build_limit_clause(10, 20) == "LIMIT 10 OFFSET 20"
    assert build_limit_clause(None) == ""
