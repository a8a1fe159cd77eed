"""Tests for the predicate compiler operators."""

import pytest

from ormcore.exceptions import InvalidOperandError, UnsupportedOperatorError
from ormcore.query import (
    OPERATOR_TOKENS,
    Literal,
    Operator,
    ParameterBinder,
    Predicate,
    RawExpression,
    compile_predicate,
    resolve_operator,
)
from ormcore.types import Dialect, ParamStyle


def test_equals_scalar() -> None:
    """Test Equals binds a scalar value."""
    predicate = compile_predicate("name", "=", "John")

    assert predicate == Predicate("name = ?", ("John",))


def test_equals_list_becomes_in() -> None:
    """Test Equals with a non-empty list renders IN."""
    predicate = compile_predicate("id", Operator.EQUALS, [1, 2, 3])

    assert predicate.fragment == "id IN (?, ?, ?)"
    assert predicate.params == (1, 2, 3)


@pytest.mark.parametrize("value", [None, [], ()])
def test_equals_null_and_empty_list(value: object) -> None:
    """Test Equals with null or an empty list renders IS NULL."""
    predicate = compile_predicate("deleted_at", "=", value)

    assert predicate.fragment == "deleted_at IS NULL"
    assert predicate.params == ()


def test_not_mirrors_equals() -> None:
    """Test Not produces the negated shape of every Equals case."""
    assert compile_predicate("a", "!=", 5) == Predicate("a != ?", (5,))
    assert compile_predicate("a", "<>", [1, 2]) == Predicate(
        "a NOT IN (?, ?)", (1, 2)
    )
    assert compile_predicate("a", ":ne", None).fragment == "a IS NOT NULL"
    assert compile_predicate("a", ":not", []).fragment == "a IS NOT NULL"


def test_in_with_list() -> None:
    """Test In binds every list element."""
    predicate = compile_predicate("status", "in", ["new", "open"])

    assert predicate.fragment == "status IN (?, ?)"
    assert predicate.params == ("new", "open")


def test_in_with_empty_list() -> None:
    """Test In with an empty list matches nothing bound."""
    predicate = compile_predicate("status", ":in", [])

    assert predicate.fragment == "status IS NULL"
    assert predicate.params == ()


@pytest.mark.parametrize("value", [1, "open", None, {"a": 1}])
def test_in_rejects_non_list(value: object) -> None:
    """Test In rejects every non-list operand."""
    with pytest.raises(InvalidOperandError) as exc_info:
        compile_predicate("status", "in", value)

    assert "expects value to be a list" in str(exc_info.value)


@pytest.mark.parametrize(
    "token,keyword",
    [
        (">", ">"),
        (":gt", ">"),
        (">=", ">="),
        (":gte", ">="),
        ("<", "<"),
        (":lt", "<"),
        ("<=", "<="),
        (":lte", "<="),
        (":like", "LIKE"),
        (":notlike", "NOT LIKE"),
    ],
)
def test_comparison_operators(token: str, keyword: str) -> None:
    """Test comparison and pattern operators bind their operand."""
    predicate = compile_predicate("age", token, 30)

    assert predicate.fragment == f"age {keyword} ?"
    assert predicate.params == (30,)


def test_comparison_rejects_list() -> None:
    """Test scalar operators reject list operands."""
    with pytest.raises(InvalidOperandError):
        compile_predicate("age", ">", [1, 2])


def test_regexp_generic_and_postgres() -> None:
    """Test RegExp keyword follows the dialect."""
    generic = compile_predicate("name", "~=", "^J")
    postgres = compile_predicate(
        "name", "=~", "^J", ParameterBinder(Dialect.POSTGRES, ParamStyle.FORMAT)
    )

    assert generic == Predicate("name REGEXP ?", ("^J",))
    assert postgres == Predicate("name ~ %s", ("^J",))


def test_fulltext() -> None:
    """Test FullText renders MATCH ... AGAINST."""
    predicate = compile_predicate("body", ":fulltext", "python orm")

    assert predicate.fragment == "MATCH(body) AGAINST (?)"
    assert predicate.params == ("python orm",)


def test_fulltext_boolean_literal() -> None:
    """Test FullTextBoolean binds literals in boolean mode."""
    predicate = compile_predicate("body", ":fulltext_boolean", "+python -java")

    assert predicate.fragment == "MATCH(body) AGAINST (? IN BOOLEAN MODE)"
    assert predicate.params == ("+python -java",)


def test_fulltext_boolean_raw_expression() -> None:
    """Test FullTextBoolean renders a raw expression verbatim."""
    raw = RawExpression(lambda: "(SELECT MAX(id) FROM posts)")

    predicate = compile_predicate("id", ":fulltext_boolean", raw)

    assert predicate.fragment == "id = (SELECT MAX(id) FROM posts)"
    assert predicate.params == ()


def test_raw_expression_rejected_elsewhere() -> None:
    """Test operators other than FullTextBoolean refuse raw expressions."""
    raw = RawExpression(lambda: "1")

    with pytest.raises(InvalidOperandError):
        compile_predicate("id", "=", raw)


def test_literal_is_unwrapped() -> None:
    """Test Literal values are bound like bare values."""
    predicate = compile_predicate("name", "=", Literal("John"))

    assert predicate == Predicate("name = ?", ("John",))


def test_values_are_never_inlined() -> None:
    """Test user values only ever reach the parameter list."""
    hostile = "x' OR '1'='1"

    predicate = compile_predicate("name", ":like", hostile)

    assert hostile not in predicate.fragment
    assert predicate.params == (hostile,)


def test_shared_binder_keeps_positions() -> None:
    """Test predicates compiled on one binder number placeholders in order."""
    binder = ParameterBinder(param_style=ParamStyle.NUMERIC)

    first = compile_predicate("a", "=", 1, binder)
    second = compile_predicate("b", "in", [2, 3], binder)

    assert first.fragment == "a = :1"
    assert second.fragment == "b IN (:2, :3)"
    assert second.params == (2, 3)
    assert binder.params == [1, 2, 3]


def test_resolve_operator_tokens() -> None:
    """Test every registered token resolves, case-insensitively."""
    for token, operator in OPERATOR_TOKENS.items():
        assert resolve_operator(token) is operator
    assert resolve_operator(":LIKE") is Operator.LIKE
    assert resolve_operator(Operator.IN) is Operator.IN


def test_unsupported_operator() -> None:
    """Test unknown tokens raise UnsupportedOperatorError."""
    with pytest.raises(UnsupportedOperatorError) as exc_info:
        compile_predicate("name", ":between", [1, 2])

    assert "Unsupported operator ':between'" in str(exc_info.value)
