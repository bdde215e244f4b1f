"""Subquery expression: a statement embedded where an expression is expected."""

from typing import Any

from ._bases import Expression


class SubqueryExpression(Expression):
    """Wraps a statement so it renders (without its own placeholder resolution) inside another one.

    The fragment is not parenthesized; the enclosing expression decides.
    """

    statement: Any

    def render(self, dialect):
        return self.statement._render(dialect)
