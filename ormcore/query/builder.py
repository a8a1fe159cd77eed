"""CRUD statement builder using positional parameters."""

from collections.abc import Mapping
from typing import Any

from ormcore.query.binder import ParameterBinder
from ormcore.query.where import (
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
)
from ormcore.types import Dialect, ParamStyle


class SQLQueryBuilder:
    """Builds SELECT/INSERT/UPDATE/DELETE/COUNT statements.

    WHERE conditions use the ``{"column operator": value}`` syntax and are
    compiled by the predicate compiler.
    """

    def __init__(
        self,
        dialect: Dialect = Dialect.GENERIC,
        param_style: ParamStyle = ParamStyle.QMARK,
        columns: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            dialect: Dialect used for dialect-specific operators
            param_style: Placeholder style of the target driver
            columns: Allowed field names mapped to storage columns for WHERE
        """
        self.dialect = dialect
        self.param_style = param_style
        self.columns = columns

    def _binder(self) -> ParameterBinder:
        return ParameterBinder(self.dialect, self.param_style)

    def select(
        self,
        table: str,
        columns: list[str] | None = None,
        where: Mapping[str, Any] | None = None,
        order_by: list[str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> tuple[str, list[Any]]:
        """Build SELECT query.

        Args:
            table: Table name
            columns: List of columns to select (None for all)
            where: WHERE conditions mapping
            order_by: ORDER BY fields list
            limit: LIMIT value
            offset: OFFSET value

        Returns:
            Tuple of (query, parameters)
        """
        cols = "*" if columns is None else ", ".join(columns)
        query = f"SELECT {cols} FROM {table}"
        params: list[Any] = []

        if where:
            where_clause, params = build_where_clause(
                where, self._binder(), self.columns
            )
            query += f" {where_clause}"

        if order_by:
            query += f" {build_order_by_clause(order_by)}"

        if limit is not None:
            query += f" {build_limit_clause(limit, offset)}"

        return query, params

    def insert(self, table: str, data: Mapping[str, Any]) -> tuple[str, list[Any]]:
        """Build INSERT query.

        Args:
            table: Table name
            data: Column to value mapping

        Returns:
            Tuple of (query, parameters)
        """
        if not data:
            raise ValueError("Cannot insert empty data")

        binder = self._binder()
        columns = list(data.keys())
        placeholders = [binder.bind(data[col]) for col in columns]

        query = (
            f"INSERT INTO {table} ({', '.join(columns)}) "
            f"VALUES ({', '.join(placeholders)})"
        )
        return query, binder.params

    def update(
        self,
        table: str,
        data: Mapping[str, Any],
        where: Mapping[str, Any] | None = None,
    ) -> tuple[str, list[Any]]:
        """Build UPDATE query.

        Args:
            table: Table name
            data: Column to value mapping
            where: WHERE conditions mapping

        Returns:
            Tuple of (query, parameters)
        """
        if not data:
            raise ValueError("Cannot update with empty data")

        binder = self._binder()
        set_clause = ", ".join(
            f"{col} = {binder.bind(value)}" for col, value in data.items()
        )
        query = f"UPDATE {table} SET {set_clause}"

        if where:
            where_clause, _ = build_where_clause(where, binder, self.columns)
            query += f" {where_clause}"

        return query, binder.params

    def delete(
        self, table: str, where: Mapping[str, Any] | None = None
    ) -> tuple[str, list[Any]]:
        """Build DELETE query."""
        query = f"DELETE FROM {table}"
        params: list[Any] = []

        if where:
            where_clause, params = build_where_clause(
                where, self._binder(), self.columns
            )
            query += f" {where_clause}"

        return query, params

    def count(
        self, table: str, where: Mapping[str, Any] | None = None
    ) -> tuple[str, list[Any]]:
        """Build COUNT query."""
        query = f"SELECT COUNT(*) AS count FROM {table}"
        params: list[Any] = []

        if where:
            where_clause, params = build_where_clause(
                where, self._binder(), self.columns
            )
            query += f" {where_clause}"

        return query, params
