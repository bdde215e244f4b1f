"""SQLite dialect."""

from typing import ClassVar, Sequence

from .base import Dialect, _function, _on_conflict_clause


class SqliteDialect(Dialect):
    """Dialect for SQLite (scheme sqlite).

    SQLite has no GREATEST/LEAST; the multi-argument MAX/MIN scalar functions stand in.
    """

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("sqlite", "sqlite3")

    F: ClassVar[dict[str, callable]] = {
        **Dialect.F,
        "greatest": _function("MAX"),
        "least": _function("MIN"),
    }

    def upsert_clause(self, columns: Sequence[str], conflict_columns: Sequence[str],
                      update_columns: Sequence[str], do_nothing: bool = False) -> str:
        return _on_conflict_clause(self, "excluded", conflict_columns, update_columns, do_nothing)
