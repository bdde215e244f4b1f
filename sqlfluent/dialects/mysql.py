"""MySQL dialect."""

from typing import ClassVar, Sequence

from .base import Dialect, _function


class MysqlDialect(Dialect):
    """Dialect for MySQL (scheme mysql): backtick identifiers, ``?`` placeholders."""

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ("mysql", "mariadb")

    QUOTE_CHAR: ClassVar[str] = "`"

    F: ClassVar[dict[str, callable]] = {
        **Dialect.F,
        "concat": _function("CONCAT"),
    }

    def upsert_clause(self, columns: Sequence[str], conflict_columns: Sequence[str],
                      update_columns: Sequence[str], do_nothing: bool = False) -> str:
        # the conflict target is implied by the table's unique keys
        if do_nothing or not update_columns:
            col = self.quote_identifier(columns[0])
            return f" ON DUPLICATE KEY UPDATE {col} = {col}"
        assignments = ", ".join(
            f"{col} = VALUES({col})"
            for col in map(self.quote_identifier, update_columns)
        )
        return " ON DUPLICATE KEY UPDATE " + assignments
