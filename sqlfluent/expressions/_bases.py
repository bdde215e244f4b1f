"""Base expression types for SQL expression trees."""

from __future__ import annotations
from typing import Any, Optional, Tuple

from pydantic import BaseModel

MARKER = "?"
"""Dialect-neutral placeholder; resolved to the dialect's syntax once per top-level build."""


class Expression(BaseModel):
    """Base type for all SQL expression nodes.

    Subclasses implement ``render(dialect)``, which returns the SQL fragment
    (with ``?`` for every bound value) and the values in the same order as
    the markers appear in the fragment. An empty fragment means the expression
    has nothing to contribute and is dropped by its container.
    """

    model_config = {"arbitrary_types_allowed": True}

    def render(self, dialect) -> Tuple[str, Tuple[Any, ...]]:
        """SQL fragment and bound values for this expression under ``dialect``."""
        raise NotImplementedError("Subclasses must implement `render`")

    def __and__(self, other: Any):
        from .logical import AndOrExpression
        return AndOrExpression(operator="AND", operands=(self, other))

    def __or__(self, other: Any):
        from .logical import AndOrExpression
        return AndOrExpression(operator="OR", operands=(self, other))

    def __invert__(self):
        from .logical import NotExpression
        return NotExpression(operand=self)


def to_expression(value: Any) -> Optional[Expression]:
    """Return ``value`` as an Expression if it is one, or a statement usable as a subquery; else None."""
    if isinstance(value, Expression):
        return value
    as_expression = getattr(value, "as_expression", None)
    if callable(as_expression):
        return as_expression()
    return None


def render_nested(expression: Expression, dialect) -> Tuple[str, Tuple[Any, ...]]:
    """Render an expression that is embedded in a larger one, parenthesizing subqueries."""
    from .subquery import SubqueryExpression
    sql, values = expression.render(dialect)
    if sql and isinstance(expression, SubqueryExpression):
        sql = "(" + sql + ")"
    return sql, values


def render_argument(value: Any, dialect) -> Tuple[str, Tuple[Any, ...]]:
    """Render one value-function argument.

    Strings starting with a quote are SQL literals and go in verbatim; other
    strings name columns; expressions (and statements) are rendered; anything
    else is bound.
    """
    if isinstance(value, str):
        if value.startswith(("'", '"')):
            return value, ()
        return dialect.quote_column(value), ()
    expression = to_expression(value)
    if expression is not None:
        return render_nested(expression, dialect)
    return MARKER, (value,)


def render_bound(value: Any, dialect) -> Tuple[str, Tuple[Any, ...]]:
    """Render a value that is bound unless it is an expression (used for THEN/ELSE and SET values)."""
    expression = to_expression(value)
    if expression is not None:
        return render_nested(expression, dialect)
    return MARKER, (value,)
