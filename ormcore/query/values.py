"""Operand values accepted by the predicate compiler."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True)
class Literal:
    """A value that is always bound as a query parameter."""

    value: Any


@dataclass(frozen=True, slots=True)
class RawExpression:
    """Deferred SQL fragment rendered verbatim into the statement.

    The compiler never inspects or binds the rendered text, so it must come
    from trusted code (e.g. a subquery built elsewhere).
    """

    render: Callable[[], str]

    def __str__(self) -> str:
        return self.render()


Value: TypeAlias = Literal | RawExpression


def as_value(value: Any) -> Value:
    """Wrap a bare Python value as a Literal; pass Value instances through."""
    if isinstance(value, (Literal, RawExpression)):
        return value
    return Literal(value)
