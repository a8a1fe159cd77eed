"""Predicate compiler: operators turning a column/value pair into SQL.

Each operator is a pure function ``(column, value, binder) -> fragment``.
Literal values always go through the binder; only the column name and the
operator keyword are written into the fragment. Column names are expected
to be validated by the caller.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ormcore.exceptions import InvalidOperandError, UnsupportedOperatorError
from ormcore.query.binder import ParameterBinder
from ormcore.query.values import Literal, RawExpression
from ormcore.types import Dialect


class Operator(str, Enum):
    """Supported comparison operators, valued by their canonical token."""

    EQUALS = "="
    NOT = "!="
    IN = "in"
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    LIKE = ":like"
    NOT_LIKE = ":notlike"
    REGEXP = ":regex"
    FULLTEXT = ":fulltext"
    FULLTEXT_BOOLEAN = ":fulltext_boolean"

    def compile(self, column: str, value: Any, binder: ParameterBinder) -> str:
        """Render this operator for ``column`` and ``value``."""
        return _COMPILERS[self](column, value, binder)


@dataclass(frozen=True, slots=True)
class Predicate:
    """Compiled SQL boolean fragment and the parameters it bound."""

    fragment: str
    params: tuple[Any, ...] = ()

    def __str__(self) -> str:
        return self.fragment


OPERATOR_TOKENS: dict[str, Operator] = {
    "=": Operator.EQUALS,
    ":eq": Operator.EQUALS,
    "!=": Operator.NOT,
    "<>": Operator.NOT,
    ":ne": Operator.NOT,
    ":not": Operator.NOT,
    "in": Operator.IN,
    ":in": Operator.IN,
    ">": Operator.GREATER_THAN,
    ":gt": Operator.GREATER_THAN,
    ">=": Operator.GREATER_THAN_OR_EQUAL,
    ":gte": Operator.GREATER_THAN_OR_EQUAL,
    "<": Operator.LESS_THAN,
    ":lt": Operator.LESS_THAN,
    "<=": Operator.LESS_THAN_OR_EQUAL,
    ":lte": Operator.LESS_THAN_OR_EQUAL,
    ":like": Operator.LIKE,
    ":notlike": Operator.NOT_LIKE,
    "~=": Operator.REGEXP,
    "=~": Operator.REGEXP,
    ":regex": Operator.REGEXP,
    ":fulltext": Operator.FULLTEXT,
    ":fulltext_boolean": Operator.FULLTEXT_BOOLEAN,
}


def resolve_operator(token: Operator | str) -> Operator:
    """Map a symbolic operator token to its Operator.

    Raises:
        UnsupportedOperatorError: If the token is not registered
    """
    if isinstance(token, Operator):
        return token
    try:
        return OPERATOR_TOKENS[token.strip().lower()]
    except KeyError:
        raise UnsupportedOperatorError(
            f"Unsupported operator '{token}' in WHERE clause"
        ) from None


def compile_predicate(
    column: str,
    operator: Operator | str,
    value: Any,
    binder: ParameterBinder | None = None,
) -> Predicate:
    """Compile one ``(column, operator, value)`` triple.

    Args:
        column: Already validated column reference
        operator: Operator or symbolic token (``>=``, ``:like``, ...)
        value: Bare value, Literal, or RawExpression
        binder: Binder of the statement being built; a fresh one if omitted

    Returns:
        Predicate holding the fragment and the parameters bound for it
    """
    resolved = resolve_operator(operator)
    if binder is None:
        binder = ParameterBinder()
    start = len(binder)
    fragment = resolved.compile(column, value, binder)
    return Predicate(fragment, tuple(binder.params[start:]))


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _operand(operator: Operator, value: Any) -> Any:
    if isinstance(value, RawExpression):
        raise InvalidOperandError(
            f"Operator '{operator.value}' does not accept raw expressions"
        )
    if isinstance(value, Literal):
        return value.value
    return value


def _scalar(operator: Operator, value: Any) -> Any:
    value = _operand(operator, value)
    if _is_list(value):
        raise InvalidOperandError(
            f"Operator '{operator.value}' expects a scalar value. "
            f"Got {type(value).__name__}."
        )
    return value


def _equals(column: str, value: Any, binder: ParameterBinder) -> str:
    value = _operand(Operator.EQUALS, value)
    if _is_list(value) and value:
        return f"{column} IN ({binder.bind_many(value)})"
    if value is None or _is_list(value):
        return f"{column} IS NULL"
    return f"{column} = {binder.bind(value)}"


def _not(column: str, value: Any, binder: ParameterBinder) -> str:
    value = _operand(Operator.NOT, value)
    if _is_list(value) and value:
        return f"{column} NOT IN ({binder.bind_many(value)})"
    if value is None or _is_list(value):
        return f"{column} IS NOT NULL"
    return f"{column} != {binder.bind(value)}"


def _in(column: str, value: Any, binder: ParameterBinder) -> str:
    value = _operand(Operator.IN, value)
    if not _is_list(value):
        raise InvalidOperandError(
            "Use of IN operator expects value to be a list. "
            f"Got {type(value).__name__}."
        )
    if not value:
        return f"{column} IS NULL"
    return f"{column} IN ({binder.bind_many(value)})"


def _comparison(operator: Operator) -> Callable[[str, Any, ParameterBinder], str]:
    keyword = {
        Operator.GREATER_THAN: ">",
        Operator.GREATER_THAN_OR_EQUAL: ">=",
        Operator.LESS_THAN: "<",
        Operator.LESS_THAN_OR_EQUAL: "<=",
        Operator.LIKE: "LIKE",
        Operator.NOT_LIKE: "NOT LIKE",
    }[operator]

    def compile_comparison(column: str, value: Any, binder: ParameterBinder) -> str:
        return f"{column} {keyword} {binder.bind(_scalar(operator, value))}"

    return compile_comparison


def _regexp(column: str, value: Any, binder: ParameterBinder) -> str:
    keyword = "~" if binder.dialect is Dialect.POSTGRES else "REGEXP"
    return f"{column} {keyword} {binder.bind(_scalar(Operator.REGEXP, value))}"


def _fulltext(column: str, value: Any, binder: ParameterBinder) -> str:
    search = binder.bind(_scalar(Operator.FULLTEXT, value))
    return f"MATCH({column}) AGAINST ({search})"


def _fulltext_boolean(column: str, value: Any, binder: ParameterBinder) -> str:
    if isinstance(value, RawExpression):
        return f"{column} = {value.render()}"
    search = binder.bind(_scalar(Operator.FULLTEXT_BOOLEAN, value))
    return f"MATCH({column}) AGAINST ({search} IN BOOLEAN MODE)"


_COMPILERS: dict[Operator, Callable[[str, Any, ParameterBinder], str]] = {
    Operator.EQUALS: _equals,
    Operator.NOT: _not,
    Operator.IN: _in,
    Operator.GREATER_THAN: _comparison(Operator.GREATER_THAN),
    Operator.GREATER_THAN_OR_EQUAL: _comparison(Operator.GREATER_THAN_OR_EQUAL),
    Operator.LESS_THAN: _comparison(Operator.LESS_THAN),
    Operator.LESS_THAN_OR_EQUAL: _comparison(Operator.LESS_THAN_OR_EQUAL),
    Operator.LIKE: _comparison(Operator.LIKE),
    Operator.NOT_LIKE: _comparison(Operator.NOT_LIKE),
    Operator.REGEXP: _regexp,
    Operator.FULLTEXT: _fulltext,
    Operator.FULLTEXT_BOOLEAN: _fulltext_boolean,
}
