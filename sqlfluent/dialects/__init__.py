"""SQL dialects: one class per engine (PostgreSQL, MySQL, SQLite)."""

from .base import Dialect
from .sqlite import SqliteDialect
from .mysql import MysqlDialect
from .postgres import PostgresDialect

_DIALECT_CLASSES: tuple[type[Dialect], ...] = (
    SqliteDialect,
    MysqlDialect,
    PostgresDialect,
)


def get_dialect(name: "str | Dialect") -> Dialect:
    """Return a Dialect instance for a URL scheme or driver name (e.g. 'sqlite', 'postgresql+psycopg2').

    Dialect instances are returned unchanged.
    """
    if isinstance(name, Dialect):
        return name
    normalized = (name or "").split("+")[0].lower()
    for dialect_cls in _DIALECT_CLASSES:
        if normalized in dialect_cls.SUPPORTED_SCHEMA:
            return dialect_cls()
    raise ValueError(f"Unsupported database dialect: {name}")


__all__ = [
    "Dialect",
    "SqliteDialect",
    "MysqlDialect",
    "PostgresDialect",
    "get_dialect",
]
