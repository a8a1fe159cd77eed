"""Predicate compiler and query building."""

from .binder import ParameterBinder
from .builder import SQLQueryBuilder
from .operators import (
    OPERATOR_TOKENS,
    Operator,
    Predicate,
    compile_predicate,
    resolve_operator,
)
from .values import Literal, RawExpression, Value, as_value
from .where import (
    build_where_clause,
    compile_condition,
    parse_condition_key,
    where_field_sql,
)

__all__ = [
    "OPERATOR_TOKENS",
    "Literal",
    "Operator",
    "ParameterBinder",
    "Predicate",
    "RawExpression",
    "SQLQueryBuilder",
    "Value",
    "as_value",
    "build_where_clause",
    "compile_condition",
    "compile_predicate",
    "parse_condition_key",
    "resolve_operator",
    "where_field_sql",
]
