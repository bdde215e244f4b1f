"""Base statement type shared by every composer."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Tuple

from pydantic import BaseModel

from ..dialects import Dialect
from ..expressions import SubqueryExpression
from ..placeholders import resolve_placeholders

logger = logging.getLogger("sqlfluent")


class CompiledStatement(BaseModel):
    """Final SQL text (dialect placeholders) and its arguments, ready for a driver."""

    model_config = {"frozen": True}

    sql: str
    args: Tuple[Any, ...] = ()


class Statement(BaseModel):
    """Immutable statement builder bound to a dialect.

    Every chained call returns a modified copy, so a partially built
    statement can be branched and reused. ``build()`` may be called any
    number of times and always returns the same result.
    """

    model_config = {"arbitrary_types_allowed": True}

    KIND: ClassVar[str] = "statement"

    dialect: Dialect

    def clone_with(self, **changes):
        """Return a copy of this statement with the given fields replaced."""
        return self.model_copy(update=changes)

    def _render(self, dialect: Dialect) -> Tuple[str, Tuple[Any, ...]]:
        """SQL with ``?`` markers and the arguments in marker order.

        Statements nested in other statements are rendered with the outer
        statement's dialect and are never resolved on their own.
        """
        raise NotImplementedError("Subclasses must implement `_render`")

    def render(self) -> Tuple[str, Tuple[Any, ...]]:
        """SQL with neutral ``?`` markers and its arguments, before placeholder resolution."""
        return self._render(self.dialect)

    def build(self) -> CompiledStatement:
        """Render, resolve placeholders for the dialect and return the compiled statement."""
        sql, args = self._render(self.dialect)
        sql = resolve_placeholders(sql, args, self.dialect)
        logger.debug("%s [%d args]: %s", self.KIND, len(args), sql)
        return CompiledStatement(sql=sql, args=args)

    def as_expression(self) -> SubqueryExpression:
        """Use this statement inside an expression (IN, EXISTS, comparisons, CASE...)."""
        return SubqueryExpression(statement=self)
