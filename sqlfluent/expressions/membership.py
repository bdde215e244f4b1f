"""IN / NOT IN expression."""

from typing import Any, Tuple

from pydantic import Field as PydanticField

from ._bases import Expression, MARKER, to_expression


class InExpression(Expression):
    """Set membership with special cases for small lists.

    - no values: ``0=1`` for IN, nothing for NOT IN
    - one value: plain ``=``/``<>`` comparison, or ``IS [NOT] NULL`` for None
    - one subquery: ``column IN (SELECT ...)``
    - several values: ``column IN (?, ?)``; None entries become a literal ``NULL``
    """

    column: str
    values: Tuple[Any, ...] = PydanticField(default_factory=tuple)
    negated: bool = False

    def render(self, dialect):
        if not self.values:
            return ("", ()) if self.negated else ("0=1", ())
        col = dialect.quote_column(self.column)
        op = "NOT IN" if self.negated else "IN"
        if len(self.values) == 1:
            value = self.values[0]
            subquery = to_expression(value)
            if subquery is not None:
                sql, values = subquery.render(dialect)
                return f"{col} {op} ({sql})", values
            if value is None:
                return col + (" IS NOT NULL" if self.negated else " IS NULL"), ()
            return col + ("<>" if self.negated else "=") + MARKER, (value,)
        placeholders = []
        values = []
        for value in self.values:
            if value is None:
                placeholders.append("NULL")
            else:
                placeholders.append(MARKER)
                values.append(value)
        return f"{col} {op} ({', '.join(placeholders)})", tuple(values)
