"""Positional parameter binding."""

from typing import Any

from ormcore.types import Dialect, ParamStyle


class ParameterBinder:
    """Collects bound values for one statement and hands out placeholders.

    One binder belongs to one statement being assembled; it is not shared
    between statements.
    """

    def __init__(
        self,
        dialect: Dialect = Dialect.GENERIC,
        param_style: ParamStyle = ParamStyle.QMARK,
    ) -> None:
        self.dialect = dialect
        self.param_style = param_style
        self._params: list[Any] = []

    @property
    def params(self) -> list[Any]:
        """Bound values in placeholder order."""
        return list(self._params)

    def bind(self, value: Any) -> str:
        """Register a value and return its placeholder token."""
        self._params.append(value)
        return self.param_style.placeholder(len(self._params))

    def bind_many(self, values: list[Any] | tuple[Any, ...]) -> str:
        """Bind each value and return the comma-separated placeholders."""
        return ", ".join(self.bind(value) for value in values)

    def __len__(self) -> int:
        return len(self._params)
