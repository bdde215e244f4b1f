"""WHERE / HAVING condition lists and the AND/OR chaining rules."""

from __future__ import annotations

from typing import Any, Mapping, Tuple

from pydantic import Field as PydanticField

from ..errors import UnsupportedOperandError
from ..expressions import (
    AndOrExpression,
    Expression,
    HashExpression,
    LikeExpression,
    RawExpression,
    SubqueryExpression,
    to_expression,
)
from ._bases import Statement


class ConditionList(Expression):
    """Conditions joined with AND.

    Conditions are not parenthesized, except disjunctions standing next to
    other conditions, so that ``(a) OR (b)`` keeps its meaning.
    """

    conditions: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        rendered = [(condition, *condition.render(dialect)) for condition in self.conditions]
        rendered = [item for item in rendered if item[1]]
        parts = []
        values = []
        for condition, sql, condition_values in rendered:
            if len(rendered) > 1 and _is_disjunction(condition):
                sql = "(" + sql + ")"
            parts.append(sql)
            values.extend(condition_values)
        return " AND ".join(parts), tuple(values)


class OrGroup(Expression):
    """``(left) OR (right)``: the accumulated conditions OR-ed with a new one."""

    left: Any
    right: Any

    def render(self, dialect):
        left_sql, left_values = self.left.render(dialect)
        right_sql, right_values = self.right.render(dialect)
        if not left_sql:
            return right_sql, right_values
        return f"({left_sql}) OR ({right_sql})", left_values + right_values


def to_condition(condition: Any, params: Tuple[Any, ...] = ()) -> Expression:
    """Turn a filter operand into an expression.

    Accepts raw SQL (with positional params), a column/value mapping, or an
    expression; anything else, including a bare select, raises
    UnsupportedOperandError.
    """
    if isinstance(condition, str):
        return RawExpression(text=condition, params=params)
    if params:
        raise UnsupportedOperandError("Positional params are only accepted with raw SQL conditions")
    if isinstance(condition, Mapping):
        return HashExpression(mapping=dict(condition))
    expression = to_expression(condition)
    if expression is None:
        raise UnsupportedOperandError(
            f"Filter must be raw SQL, a mapping or an Expression, got {type(condition).__name__}"
        )
    if isinstance(expression, SubqueryExpression):
        raise UnsupportedOperandError(
            "A select is not a condition; wrap it in exists(...), not_exists(...) or in_(column, ...)"
        )
    return expression


def add_condition(statement: Statement, field: str, condition: Any, params: Tuple[Any, ...]):
    """Return a copy of ``statement`` with ``condition`` AND-ed to the list in ``field``."""
    expression = to_condition(condition, params)
    if not expression.render(statement.dialect)[0]:
        return statement
    return statement.clone_with(**{field: getattr(statement, field) + (expression,)})


def or_condition(statement: Statement, field: str, condition: Any, params: Tuple[Any, ...]):
    """Return a copy of ``statement`` whose whole condition list is OR-ed with ``condition``.

    The accumulated list becomes the left group, so repeated calls nest to
    the left: ``((a AND b) OR (c)) OR (d)``.
    """
    existing = getattr(statement, field)
    if not existing:
        return add_condition(statement, field, condition, params)
    expression = to_condition(condition, params)
    if not expression.render(statement.dialect)[0]:
        return statement
    group = OrGroup(left=ConditionList(conditions=existing), right=expression)
    return statement.clone_with(**{field: (group,)})


class FilteredStatement(Statement):
    """Statement with a WHERE clause (select, update, delete)."""

    where_conditions: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def where(self, condition: Any, *params: Any):
        """Add a condition, AND-ed with the existing ones.

        Examples:
            where("age > ?", 18)
            where({"status": "active", "deleted_at": None})
            where(eq("role", "admin") | eq("role", "owner"))
        """
        return add_condition(self, "where_conditions", condition, params)

    def and_where(self, condition: Any, *params: Any):
        """Same as ``where``."""
        return add_condition(self, "where_conditions", condition, params)

    def or_where(self, condition: Any, *params: Any):
        """Replace the conditions with ``(existing) OR (condition)``."""
        return or_condition(self, "where_conditions", condition, params)

    def _render_where(self, dialect):
        sql, values = ConditionList(conditions=self.where_conditions).render(dialect)
        return (" WHERE " + sql if sql else ""), values


def _is_disjunction(condition: Any) -> bool:
    if isinstance(condition, OrGroup):
        return True
    if isinstance(condition, AndOrExpression):
        return condition.operator == "OR"
    if isinstance(condition, LikeExpression):
        return condition.any_of and len(condition.patterns) > 1
    return False
