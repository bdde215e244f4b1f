"""EXISTS / NOT EXISTS expression."""

from typing import Any

from ._bases import Expression
from .logical import _operand


class ExistsExpression(Expression):
    """``[NOT] EXISTS (subquery)``.

    With no operand, or one that renders nothing, EXISTS is always false
    (``0=1``) and NOT EXISTS is always true (rendered as nothing).
    """

    operand: Any = None
    negated: bool = False

    def _empty(self):
        return ("", ()) if self.negated else ("0=1", ())

    def render(self, dialect):
        if self.operand is None:
            return self._empty()
        sql, values = _operand(self.operand).render(dialect)
        if not sql:
            return self._empty()
        return ("NOT EXISTS (" if self.negated else "EXISTS (") + sql + ")", values
