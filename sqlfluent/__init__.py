"""sqlfluent: a fluent SQL statement builder with dialect-aware placeholders and a prepared-statement cache."""

from .builder import QueryBuilder
from .cache import StatementCache
from .dialects import get_dialect
from .errors import CompositionError
from .statements import CompiledStatement

__all__ = [
    "QueryBuilder",
    "StatementCache",
    "get_dialect",
    "CompositionError",
    "CompiledStatement",
]
