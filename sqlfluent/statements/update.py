"""UPDATE and DELETE composers."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional

from pydantic import Field as PydanticField

from ..errors import CompositionError
from ..expressions import render_bound
from ._filters import FilteredStatement


class UpdateQuery(FilteredStatement):
    """``UPDATE "table" SET "a" = ?, "b" = ? [WHERE ...]``; columns are sorted.

    A value that is an expression is rendered in place instead of bound
    (e.g. ``set(count=raw('"count" + 1'))``).
    """

    KIND: ClassVar[str] = "update"

    table: str
    assignments: Dict[str, Any] = PydanticField(default_factory=dict)

    def set(self, values: Optional[Mapping[str, Any]] = None, **columns: Any) -> UpdateQuery:
        return self.clone_with(assignments={**self.assignments, **(values or {}), **columns})

    def _render(self, dialect):
        if not self.assignments:
            raise CompositionError(f"UPDATE {self.table} has no assignments")
        parts = []
        values = []
        for column in sorted(self.assignments):
            sql, column_values = render_bound(self.assignments[column], dialect)
            parts.append(f"{dialect.quote_identifier(column)} = {sql}")
            values.extend(column_values)
        sql = f"UPDATE {dialect.quote_table(self.table)} SET " + ", ".join(parts)
        where_sql, where_values = self._render_where(dialect)
        return sql + where_sql, tuple(values) + where_values


class DeleteQuery(FilteredStatement):
    """``DELETE FROM "table" [WHERE ...]``."""

    KIND: ClassVar[str] = "delete"

    table: str

    def _render(self, dialect):
        where_sql, where_values = self._render_where(dialect)
        return f"DELETE FROM {dialect.quote_table(self.table)}" + where_sql, where_values
