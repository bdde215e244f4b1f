"""Statement composers: immutable builders that render SQL and arguments."""

from ._bases import CompiledStatement, Statement
from ._filters import FilteredStatement
from .batch import BatchInsertQuery, BatchUpdateQuery
from .insert import InsertQuery, UpsertQuery
from .select import JOIN_KINDS, SelectQuery
from .update import DeleteQuery, UpdateQuery

__all__ = [
    "CompiledStatement",
    "Statement",
    "FilteredStatement",
    "SelectQuery",
    "UpdateQuery",
    "DeleteQuery",
    "InsertQuery",
    "UpsertQuery",
    "BatchInsertQuery",
    "BatchUpdateQuery",
    "JOIN_KINDS",
]
