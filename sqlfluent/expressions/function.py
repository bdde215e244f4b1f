"""Value functions: CASE, COALESCE, NULLIF, GREATEST/LEAST and string concatenation."""

from typing import Any, Literal, Optional, Tuple

from pydantic import Field as PydanticField

from ._bases import Expression, render_argument, render_bound, to_expression


class FunctionExpression(Expression):
    """Base for value functions: holds an optional output alias (``... AS "alias"``)."""

    alias: Optional[str] = None

    def as_(self, alias: str):
        """Return a copy rendered with ``AS "alias"``."""
        return self.model_copy(update={"alias": alias})

    def _aliased(self, sql: str, dialect) -> str:
        if sql and self.alias:
            return sql + " AS " + dialect.quote_identifier(self.alias)
        return sql

    def _render_arguments(self, arguments, dialect):
        parts = []
        values = []
        for argument in arguments:
            sql, argument_values = render_argument(argument, dialect)
            parts.append(sql)
            values.extend(argument_values)
        return parts, tuple(values)


class CaseExpression(FunctionExpression):
    """Simple ``CASE "col" WHEN ? THEN ? ... END`` or searched ``CASE WHEN <condition> THEN ? ... END``.

    In the simple form, WHEN values are bound. In the searched form (no
    ``column``) a string condition is raw SQL and an expression condition is
    rendered. THEN and ELSE results are bound unless they are expressions.
    """

    column: Optional[str] = None
    whens: Tuple[Tuple[Any, Any], ...] = PydanticField(default_factory=tuple)
    else_value: Any = None

    def when(self, condition: Any, result: Any) -> "CaseExpression":
        return self.model_copy(update={"whens": self.whens + ((condition, result),)})

    def else_(self, value: Any) -> "CaseExpression":
        return self.model_copy(update={"else_value": value})

    def _render_condition(self, condition: Any, dialect):
        if self.column is not None:
            return render_bound(condition, dialect)
        expression = to_expression(condition)
        if expression is not None:
            return expression.render(dialect)
        return str(condition), ()

    def render(self, dialect):
        if not self.whens:
            return "", ()
        sql = "CASE"
        if self.column is not None:
            sql += " " + dialect.quote_column(self.column)
        values = []
        for condition, result in self.whens:
            condition_sql, condition_values = self._render_condition(condition, dialect)
            result_sql, result_values = render_bound(result, dialect)
            sql += f" WHEN {condition_sql} THEN {result_sql}"
            values.extend(condition_values)
            values.extend(result_values)
        if self.else_value is not None:
            else_sql, else_values = render_bound(self.else_value, dialect)
            sql += " ELSE " + else_sql
            values.extend(else_values)
        return self._aliased(sql + " END", dialect), tuple(values)


class CoalesceExpression(FunctionExpression):
    """``COALESCE(a, b, ...)``: first non-null argument."""

    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        if not self.arguments:
            return "", ()
        parts, values = self._render_arguments(self.arguments, dialect)
        return self._aliased("COALESCE(" + ", ".join(parts) + ")", dialect), values


class NullIfExpression(FunctionExpression):
    """``NULLIF(a, b)``: NULL when both arguments are equal, else ``a``."""

    left: Any
    right: Any

    def render(self, dialect):
        parts, values = self._render_arguments((self.left, self.right), dialect)
        return self._aliased("NULLIF(" + ", ".join(parts) + ")", dialect), values


class GreatestLeastExpression(FunctionExpression):
    """``GREATEST(...)``/``LEAST(...)``, or whatever the dialect uses instead (MAX/MIN on SQLite)."""

    function: Literal["greatest", "least"]
    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        if not self.arguments:
            return "", ()
        parts, values = self._render_arguments(self.arguments, dialect)
        helper = getattr(dialect.f, self.function)
        return self._aliased(helper(*parts), dialect), values


class ConcatExpression(FunctionExpression):
    """String concatenation: ``a || b`` or ``CONCAT(a, b)`` depending on the dialect."""

    arguments: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        if not self.arguments:
            return "", ()
        parts, values = self._render_arguments(self.arguments, dialect)
        return self._aliased(dialect.f.concat(*parts), dialect), values


__all__ = [
    "FunctionExpression",
    "CaseExpression",
    "CoalesceExpression",
    "NullIfExpression",
    "GreatestLeastExpression",
    "ConcatExpression",
]
