"""INSERT and UPSERT composers."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from pydantic import Field as PydanticField

from ..errors import CompositionError
from ..expressions import render_bound
from ._bases import Statement


class InsertQuery(Statement):
    """``INSERT INTO "table" ("a", "b") VALUES (?, ?)``; columns are sorted."""

    KIND: ClassVar[str] = "insert"

    table: str
    row: Dict[str, Any] = PydanticField(default_factory=dict)

    def values(self, values: Optional[Mapping[str, Any]] = None, **columns: Any):
        return self.clone_with(row={**self.row, **(values or {}), **columns})

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(sorted(self.row))

    def _render_insert(self, dialect):
        if not self.row:
            raise CompositionError(f"INSERT INTO {self.table} has no values")
        placeholders = []
        values = []
        for column in self.columns:
            sql, column_values = render_bound(self.row[column], dialect)
            placeholders.append(sql)
            values.extend(column_values)
        columns = ", ".join(map(dialect.quote_identifier, self.columns))
        sql = f"INSERT INTO {dialect.quote_table(self.table)} ({columns}) VALUES ({', '.join(placeholders)})"
        return sql, tuple(values)

    def _render(self, dialect):
        return self._render_insert(dialect)


class UpsertQuery(InsertQuery):
    """INSERT with a conflict action.

    Without ``do_update``, every inserted column except the conflict columns
    is updated. PostgreSQL/SQLite render ``ON CONFLICT (...) DO UPDATE SET
    c = EXCLUDED.c``; MySQL renders ``ON DUPLICATE KEY UPDATE c = VALUES(c)``.
    """

    KIND: ClassVar[str] = "upsert"

    conflict_columns: Tuple[str, ...] = PydanticField(default_factory=tuple)
    update_columns: Optional[Tuple[str, ...]] = None
    ignore_conflict: bool = False

    def on_conflict(self, *columns: str) -> UpsertQuery:
        return self.clone_with(conflict_columns=columns)

    def do_update(self, *columns: str) -> UpsertQuery:
        return self.clone_with(update_columns=columns, ignore_conflict=False)

    def do_nothing(self) -> UpsertQuery:
        return self.clone_with(ignore_conflict=True)

    def _update_columns(self) -> Tuple[str, ...]:
        if self.update_columns is not None:
            return tuple(sorted(self.update_columns))
        return tuple(c for c in self.columns if c not in self.conflict_columns)

    def _render(self, dialect):
        sql, values = self._render_insert(dialect)
        clause = dialect.upsert_clause(
            self.columns, self.conflict_columns, self._update_columns(), self.ignore_conflict
        )
        return sql + clause, values
