"""Comparison expression."""

from typing import Any, Literal

from ._bases import Expression, MARKER, to_expression


class CompareExpression(Expression):
    """``column <op> value``; ``=``/``<>`` against None become ``IS [NOT] NULL``.

    An expression (or statement) value is rendered in parentheses instead of bound.
    """

    column: str
    operator: Literal["=", "<>", ">", "<", ">=", "<="]
    value: Any = None

    def render(self, dialect):
        col = dialect.quote_column(self.column)
        if self.value is None:
            if self.operator == "=":
                return col + " IS NULL", ()
            if self.operator == "<>":
                return col + " IS NOT NULL", ()
        expression = to_expression(self.value)
        if expression is not None:
            sql, values = expression.render(dialect)
            return col + self.operator + "(" + sql + ")", values
        return col + self.operator + MARKER, (self.value,)
