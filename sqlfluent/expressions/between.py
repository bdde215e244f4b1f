"""BETWEEN expression."""

from typing import Any

from ._bases import Expression, MARKER


class BetweenExpression(Expression):
    """``column [NOT] BETWEEN ? AND ?`` (inclusive range)."""

    column: str
    low: Any
    high: Any
    negated: bool = False

    def render(self, dialect):
        op = "NOT BETWEEN" if self.negated else "BETWEEN"
        return f"{dialect.quote_column(self.column)} {op} {MARKER} AND {MARKER}", (self.low, self.high)
