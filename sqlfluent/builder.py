"""Entry point: a query builder bound to one dialect."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from .dialects import Dialect, get_dialect
from .params import expand_named_params
from .placeholders import resolve_placeholders
from .statements import (
    BatchInsertQuery,
    BatchUpdateQuery,
    CompiledStatement,
    DeleteQuery,
    InsertQuery,
    SelectQuery,
    UpdateQuery,
    UpsertQuery,
)
from .errors import BatchError

logger = logging.getLogger("sqlfluent")


class QueryBuilder:
    """Create statements for one dialect.

    Example:
        qb = QueryBuilder("postgresql")
        stmt = qb.select("id", "name").from_("users").where("age > ?", 18).build()
        stmt.sql   # SELECT "id", "name" FROM "users" WHERE age > $1
        stmt.args  # (18,)
    """

    def __init__(self, dialect: str | Dialect):
        self.dialect = get_dialect(dialect)

    def select(self, *columns: Any) -> SelectQuery:
        return SelectQuery(dialect=self.dialect).select(*columns)

    def update(self, table: str, values: Optional[Mapping[str, Any]] = None) -> UpdateQuery:
        return UpdateQuery(dialect=self.dialect, table=table, assignments=dict(values or {}))

    def delete(self, table: str) -> DeleteQuery:
        return DeleteQuery(dialect=self.dialect, table=table)

    def insert(self, table: str, values: Optional[Mapping[str, Any]] = None) -> InsertQuery:
        return InsertQuery(dialect=self.dialect, table=table, row=dict(values or {}))

    def upsert(self, table: str, values: Optional[Mapping[str, Any]] = None) -> UpsertQuery:
        return UpsertQuery(dialect=self.dialect, table=table, row=dict(values or {}))

    def batch_insert(self, table: str, columns: Sequence[str]) -> BatchInsertQuery:
        return BatchInsertQuery(dialect=self.dialect, table=table, columns=tuple(columns))

    def batch_update(self, table: str, key_column: str) -> BatchUpdateQuery:
        if not key_column:
            raise BatchError("batch update requires a key column")
        return BatchUpdateQuery(dialect=self.dialect, table=table, key_column=key_column)

    def new_query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> CompiledStatement:
        """Compile hand-written SQL using ``{:name}``, ``{{table}}`` and ``[[column]]`` placeholders."""
        sql, args = expand_named_params(sql, params or {}, self.dialect)
        sql = resolve_placeholders(sql, args, self.dialect)
        logger.debug("query [%d args]: %s", len(args), sql)
        return CompiledStatement(sql=sql, args=args)
