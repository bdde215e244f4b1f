"""PostgreSQL dialect."""

from typing import ClassVar, Sequence

from .base import Dialect, _on_conflict_clause


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL: double-quoted identifiers, ``$n`` placeholders."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("postgresql", "postgres", "pgx")

    PLACEHOLDER_STYLE: ClassVar[str] = "numbered"

    def upsert_clause(self, columns: Sequence[str], conflict_columns: Sequence[str],
                      update_columns: Sequence[str], do_nothing: bool = False) -> str:
        return _on_conflict_clause(self, "EXCLUDED", conflict_columns, update_columns, do_nothing)
