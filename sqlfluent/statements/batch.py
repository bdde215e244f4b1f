"""Multi-row INSERT and keyed multi-row UPDATE composers."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Mapping, Tuple

from pydantic import Field as PydanticField

from ..errors import BatchError
from ..expressions import MARKER
from ._bases import Statement


class BatchInsertQuery(Statement):
    """``INSERT INTO "t" ("a", "b") VALUES (?, ?), (?, ?)`` with columns in declared order."""

    KIND: ClassVar[str] = "batch_insert"

    table: str
    columns: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...] = PydanticField(default_factory=tuple)

    def values(self, *row: Any) -> BatchInsertQuery:
        """Add one row, given in column order."""
        if len(row) != len(self.columns):
            raise BatchError(
                f"value count mismatch: expected {len(self.columns)}, got {len(row)}"
            )
        return self.clone_with(rows=self.rows + (tuple(row),))

    def values_map(self, row: Mapping[str, Any]) -> BatchInsertQuery:
        """Add one row from a mapping; missing columns are NULL."""
        unknown = set(row) - set(self.columns)
        if unknown:
            raise BatchError(f"unknown columns: {', '.join(sorted(unknown))}")
        return self.values(*(row.get(column) for column in self.columns))

    def _render(self, dialect):
        if not self.rows:
            raise BatchError(f"batch insert into {self.table} has no rows")
        row_sql = "(" + ", ".join(MARKER for _ in self.columns) + ")"
        columns = ", ".join(map(dialect.quote_identifier, self.columns))
        sql = (
            f"INSERT INTO {dialect.quote_table(self.table)} ({columns}) VALUES "
            + ", ".join(row_sql for _ in self.rows)
        )
        return sql, tuple(value for row in self.rows for value in row)


class BatchUpdateQuery(Statement):
    """Update many rows, each identified by ``key_column``, in one statement.

    Renders one CASE per column (sorted across all rows), covering only the
    rows that set that column::

        UPDATE "t" SET "a" = CASE "id" WHEN ? THEN ? ELSE "a" END WHERE "id" IN (?, ?)

    Key values for the trailing IN come after every CASE argument.
    """

    KIND: ClassVar[str] = "batch_update"

    table: str
    key_column: str
    rows: Tuple[Tuple[Any, Dict[str, Any]], ...] = PydanticField(default_factory=tuple)

    def set(self, key: Any, values: Mapping[str, Any]) -> BatchUpdateQuery:
        """Add the new ``values`` for the row whose key column equals ``key``."""
        return self.clone_with(rows=self.rows + ((key, dict(values)),))

    def _render(self, dialect):
        if not self.rows:
            raise BatchError(f"batch update of {self.table} has no rows")
        columns = sorted({column for _, values in self.rows for column in values} - {self.key_column})
        if not columns:
            raise BatchError(f"batch update of {self.table} has no columns to set")
        key = dialect.quote_identifier(self.key_column)
        assignments = []
        args = []
        for column in columns:
            quoted = dialect.quote_identifier(column)
            whens = []
            for row_key, values in self.rows:
                if column in values:
                    whens.append(f"WHEN {MARKER} THEN {MARKER}")
                    args.extend((row_key, values[column]))
            assignments.append(f"{quoted} = CASE {key} {' '.join(whens)} ELSE {quoted} END")
        keys = [row_key for row_key, _ in self.rows]
        sql = (
            f"UPDATE {dialect.quote_table(self.table)} SET " + ", ".join(assignments)
            + f" WHERE {key} IN (" + ", ".join(MARKER for _ in keys) + ")"
        )
        return sql, tuple(args) + tuple(keys)
