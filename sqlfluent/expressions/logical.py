"""AND / OR / NOT expressions."""

from typing import Any, Literal, Tuple

from pydantic import Field as PydanticField

from ..errors import UnsupportedOperandError
from ._bases import Expression, render_nested, to_expression


def _operand(value: Any) -> Expression:
    expression = to_expression(value)
    if expression is None:
        raise UnsupportedOperandError(
            f"Logical operands must be expressions, got {type(value).__name__}"
        )
    return expression


class AndOrExpression(Expression):
    """Conjunction or disjunction of operands.

    None operands and operands rendering to nothing are dropped; a single
    survivor is returned as is, two or more are each parenthesized.
    """

    operator: Literal["AND", "OR"]
    operands: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        parts = []
        values = []
        for operand in self.operands:
            if operand is None:
                continue
            sql, operand_values = render_nested(_operand(operand), dialect)
            if sql:
                parts.append(sql)
                values.extend(operand_values)
        if len(parts) <= 1:
            return (parts[0] if parts else ""), tuple(values)
        return "(" + f") {self.operator} (".join(parts) + ")", tuple(values)


class NotExpression(Expression):
    """``NOT (operand)``; renders nothing when the operand is None or empty."""

    operand: Any = None

    def render(self, dialect):
        if self.operand is None:
            return "", ()
        sql, values = _operand(self.operand).render(dialect)
        if not sql:
            return "", ()
        return "NOT (" + sql + ")", values
