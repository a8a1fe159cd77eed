"""WHERE clause assembly on top of the predicate compiler."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

from ormcore.exceptions import ParameterCountError, UnknownFieldError
from ormcore.query.binder import ParameterBinder
from ormcore.query.operators import Predicate, compile_predicate


def parse_condition_key(key: str) -> tuple[str, str]:
    """Split a condition key into column and operator token.

    Example:
        >>> parse_condition_key("age >=")
        ("age", ">=")
        >>> parse_condition_key("name")
        ("name", "=")
    """
    parts = key.split()
    if not parts:
        raise UnknownFieldError("Condition key must name a column")
    if len(parts) == 1:
        return parts[0], "="
    if len(parts) == 2:
        return parts[0], parts[1]
    return " ".join(parts[:-1]), parts[-1]


def compile_condition(
    key: str,
    value: Any,
    binder: ParameterBinder,
    columns: Mapping[str, str] | None = None,
) -> Predicate:
    """Compile a single ``{"column operator": value}`` condition.

    Args:
        key: Column name optionally followed by an operator token
        value: Operand value
        binder: Binder of the statement being built
        columns: Allowed field names mapped to their storage columns

    Raises:
        UnknownFieldError: If ``columns`` is given and does not list the field
    """
    field, token = parse_condition_key(key)
    column = field
    if columns is not None:
        if field not in columns:
            raise UnknownFieldError(f"Unknown field '{field}' in WHERE clause")
        column = columns[field]
    return compile_predicate(column, token, value, binder)


def build_where_clause(
    conditions: Mapping[str, Any] | None,
    binder: ParameterBinder | None = None,
    columns: Mapping[str, str] | None = None,
) -> tuple[str, list[Any]]:
    """Build an AND-joined WHERE clause from a conditions mapping.

    Args:
        conditions: Mapping of ``"column [operator]"`` keys to values
        binder: Binder of the statement being built
        columns: Allowed field names mapped to their storage columns

    Returns:
        Tuple of (where_clause, parameters)

    Example:
        >>> build_where_clause({"name": "John", "age >": 30})
        ("WHERE name = ? AND age > ?", ["John", 30])
    """
    if not conditions:
        return "", []

    if binder is None:
        binder = ParameterBinder()
    start = len(binder)

    fragments = [
        compile_condition(key, value, binder, columns).fragment
        for key, value in conditions.items()
    ]
    return f"WHERE {' AND '.join(fragments)}", binder.params[start:]


def where_field_sql(
    column: str,
    sql: str,
    params: Sequence[Any],
    binder: ParameterBinder,
) -> Predicate:
    """Attach a raw SQL fragment to a column, binding each ``?`` in order.

    Raises:
        ParameterCountError: If placeholders and parameters disagree
    """
    placeholder_count = sql.count("?")
    if placeholder_count != len(params):
        raise ParameterCountError(
            f"Number of supplied parameters ({len(params)}) does not match "
            f"the number of provided placeholders ({placeholder_count})"
        )

    start = len(binder)
    remaining = iter(params)
    rendered = re.sub(r"\?", lambda _: binder.bind(next(remaining)), sql)
    return Predicate(f"{column} {rendered}", tuple(binder.params[start:]))


def build_order_by_clause(order_by: list[str] | None) -> str:
    """Build ORDER BY clause from field list.

    Example:
        >>> build_order_by_clause(["name", "age DESC"])
        "ORDER BY name, age DESC"
    """
    if not order_by:
        return ""

    return f"ORDER BY {', '.join(order_by)}"


def build_limit_clause(limit: int | None, offset: int | None = None) -> str:
    """Build LIMIT clause with optional OFFSET.

    Example:
        >>> build_limit_clause(10, 20)
        "LIMIT 10 OFFSET 20"
    """
    if limit is None:
        return ""

    clause = f"LIMIT {limit}"
    if offset is not None:
        clause += f" OFFSET {offset}"

    return clause
