"""Column/value mapping expression."""

from typing import Any, Dict

from ._bases import Expression, MARKER, to_expression
from .membership import InExpression
from .subquery import SubqueryExpression


class HashExpression(Expression):
    """Equality on every mapped column, joined with AND.

    Keys are sorted so that the SQL text and the value order do not depend on
    insertion order. None gives ``IS NULL``; a list or tuple gives IN; a
    select gives ``column IN (SELECT ...)``; any other expression is
    inserted in parentheses.
    """

    mapping: Dict[str, Any]

    @staticmethod
    def _render_item(column: str, value: Any, dialect):
        if value is None:
            return dialect.quote_column(column) + " IS NULL", ()
        expression = to_expression(value)
        if isinstance(expression, SubqueryExpression):
            return InExpression(column=column, values=(expression,)).render(dialect)
        if expression is not None:
            sql, values = expression.render(dialect)
            return ("(" + sql + ")", values) if sql else ("", ())
        if isinstance(value, (list, tuple)):
            return InExpression(column=column, values=tuple(value)).render(dialect)
        return dialect.quote_column(column) + "=" + MARKER, (value,)

    def render(self, dialect):
        parts = []
        values = []
        for column in sorted(self.mapping):
            sql, item_values = self._render_item(column, self.mapping[column], dialect)
            if sql:
                parts.append(sql)
                values.extend(item_values)
        return " AND ".join(parts), tuple(values)
