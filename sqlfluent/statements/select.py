"""SELECT composer, including joins, grouping, CTEs and set operations."""

from __future__ import annotations

import re
from typing import Any, ClassVar, Literal, Optional, Tuple

from pydantic import BaseModel, Field as PydanticField

from ..errors import CompositionError, CTEError, UnsupportedOperandError
from ..expressions import RawExpression, SubqueryExpression, to_expression
from ._filters import ConditionList, FilteredStatement, add_condition, or_condition

_ORDER_TERM = re.compile(r"^(.*?)\s+(ASC|DESC)$", re.IGNORECASE)

JOIN_KINDS = ("INNER JOIN", "LEFT JOIN", "RIGHT JOIN", "FULL OUTER JOIN", "CROSS JOIN")


class Join(BaseModel):
    """One JOIN: a table name (optionally ``"table alias"``) or an aliased subquery."""

    model_config = {"arbitrary_types_allowed": True}

    kind: str
    target: Any
    alias: Optional[str] = None
    on: Any = None


class CommonTableExpression(BaseModel):
    model_config = {"arbitrary_types_allowed": True}

    name: str
    query: Any
    recursive: bool = False


class SetOperation(BaseModel):
    model_config = {"arbitrary_types_allowed": True}

    operator: Literal["UNION", "UNION ALL", "INTERSECT", "EXCEPT"]
    query: Any


def _needs_parentheses(query: "SelectQuery") -> bool:
    """A set-operation operand is wrapped only when its own ORDER BY/LIMIT/OFFSET or set operations would leak."""
    return bool(query.order_terms or query.limit_value is not None
                or query.offset_value is not None or query.set_operations)


class SelectQuery(FilteredStatement):
    """Fluent SELECT builder.

    Clause order: ``[WITH ...] SELECT [DISTINCT] ... FROM ... JOIN ... WHERE ...
    GROUP BY ... HAVING ... [set operations] ORDER BY ... LIMIT ... OFFSET ...``.
    Arguments follow the same left-to-right order.

    Example:
        SelectQuery(dialect=PostgresDialect()).select("user_id", "COUNT(*) AS cnt")
            .from_("messages").group_by("user_id").having("COUNT(*) > ?", 100)
    """

    KIND: ClassVar[str] = "select"

    is_distinct: bool = False
    projection: Tuple[Any, ...] = PydanticField(default_factory=tuple)
    """Column strings and expressions, rendered in order."""
    source: Optional[str] = None
    source_query: Any = None
    source_alias: Optional[str] = None
    joins: Tuple[Join, ...] = PydanticField(default_factory=tuple)
    group_columns: Tuple[str, ...] = PydanticField(default_factory=tuple)
    having_conditions: Tuple[Any, ...] = PydanticField(default_factory=tuple)
    order_terms: Tuple[str, ...] = PydanticField(default_factory=tuple)
    limit_value: Optional[int] = None
    offset_value: Optional[int] = None
    ctes: Tuple[CommonTableExpression, ...] = PydanticField(default_factory=tuple)
    set_operations: Tuple[SetOperation, ...] = PydanticField(default_factory=tuple)

    # --- projection and source ---

    def select(self, *columns: Any) -> SelectQuery:
        """Append columns: names (quoted), SQL such as ``COUNT(*) AS cnt`` (verbatim) or expressions."""
        for column in columns:
            if not isinstance(column, str) and to_expression(column) is None:
                raise UnsupportedOperandError(
                    f"select expects column names or Expressions, got {type(column).__name__}"
                )
        return self.clone_with(projection=self.projection + columns)

    def select_expr(self, expression: Any, *params: Any) -> SelectQuery:
        """Append a computed column: raw SQL with params, an expression, or a scalar subquery."""
        if isinstance(expression, str):
            expression = RawExpression(text=expression, params=params)
        elif to_expression(expression) is None:
            raise UnsupportedOperandError(
                f"select_expr expects raw SQL or an Expression, got {type(expression).__name__}"
            )
        return self.clone_with(projection=self.projection + (expression,))

    def distinct(self, distinct: bool = True) -> SelectQuery:
        return self.clone_with(is_distinct=distinct)

    def from_(self, table: str) -> SelectQuery:
        """Set the source table; ``"users u"`` renders as ``"users" AS "u"``."""
        return self.clone_with(source=table, source_query=None, source_alias=None)

    def from_select(self, query: SelectQuery, alias: str) -> SelectQuery:
        """Select from a subquery; the alias is mandatory."""
        if not alias:
            raise CompositionError("A subquery in FROM requires an alias")
        return self.clone_with(source=None, source_query=query, source_alias=alias)

    # --- joins ---

    def join(self, kind: str, table: Any, on: Any = None, alias: Optional[str] = None) -> SelectQuery:
        """Add a join. ``table`` is a name (with optional alias) or a select statement,
        which then needs ``alias``. ``on`` is raw SQL, an expression, or None."""
        kind = kind.upper()
        if kind not in JOIN_KINDS:
            raise CompositionError(f"Unsupported join kind: {kind}")
        if not isinstance(table, str):
            if to_expression(table) is None:
                raise UnsupportedOperandError(
                    f"Join target must be a table name or a select, got {type(table).__name__}"
                )
            if not alias:
                raise CompositionError("A joined subquery requires an alias")
        if on is not None and not isinstance(on, str) and to_expression(on) is None:
            raise UnsupportedOperandError(
                f"JOIN ON must be raw SQL or an Expression, got {type(on).__name__}"
            )
        return self.clone_with(joins=self.joins + (Join(kind=kind, target=table, alias=alias, on=on),))

    def inner_join(self, table: Any, on: Any = None, alias: Optional[str] = None) -> SelectQuery:
        return self.join("INNER JOIN", table, on, alias)

    def left_join(self, table: Any, on: Any = None, alias: Optional[str] = None) -> SelectQuery:
        return self.join("LEFT JOIN", table, on, alias)

    def right_join(self, table: Any, on: Any = None, alias: Optional[str] = None) -> SelectQuery:
        return self.join("RIGHT JOIN", table, on, alias)

    def full_join(self, table: Any, on: Any = None, alias: Optional[str] = None) -> SelectQuery:
        return self.join("FULL OUTER JOIN", table, on, alias)

    def cross_join(self, table: Any, alias: Optional[str] = None) -> SelectQuery:
        return self.join("CROSS JOIN", table, None, alias)

    # --- grouping, ordering, paging ---

    def group_by(self, *columns: str) -> SelectQuery:
        return self.clone_with(group_columns=self.group_columns + columns)

    def having(self, condition: Any, *params: Any) -> SelectQuery:
        """Add a HAVING condition, AND-ed with the existing ones (same operands as ``where``)."""
        return add_condition(self, "having_conditions", condition, params)

    def and_having(self, condition: Any, *params: Any) -> SelectQuery:
        return add_condition(self, "having_conditions", condition, params)

    def or_having(self, condition: Any, *params: Any) -> SelectQuery:
        return or_condition(self, "having_conditions", condition, params)

    def order_by(self, *terms: str) -> SelectQuery:
        """Append ordering terms such as ``"age DESC"`` or ``"users.name"``."""
        return self.clone_with(order_terms=self.order_terms + terms)

    def limit(self, limit: int) -> SelectQuery:
        return self.clone_with(limit_value=limit)

    def offset(self, offset: int) -> SelectQuery:
        return self.clone_with(offset_value=offset)

    # --- set operations ---

    def _set_operation(self, operator: str, query: SelectQuery) -> SelectQuery:
        if not isinstance(query, SelectQuery):
            raise UnsupportedOperandError(f"{operator} expects a select, got {type(query).__name__}")
        return self.clone_with(set_operations=self.set_operations + (SetOperation(operator=operator, query=query),))

    def union(self, query: SelectQuery) -> SelectQuery:
        return self._set_operation("UNION", query)

    def union_all(self, query: SelectQuery) -> SelectQuery:
        return self._set_operation("UNION ALL", query)

    def intersect(self, query: SelectQuery) -> SelectQuery:
        return self._set_operation("INTERSECT", query)

    def except_(self, query: SelectQuery) -> SelectQuery:
        return self._set_operation("EXCEPT", query)

    # --- common table expressions ---

    def with_(self, name: str, query: Optional[SelectQuery]) -> SelectQuery:
        """Add ``WITH "name" AS (query)``."""
        return self._with(name, query, recursive=False)

    def with_recursive(self, name: str, query: Optional[SelectQuery]) -> SelectQuery:
        """Add a recursive CTE; ``query`` must be an anchor UNION [ALL]-ed with the recursive term."""
        if query is not None and not any(
            operation.operator.startswith("UNION")
            for operation in getattr(query, "set_operations", ())
        ):
            raise CTEError("recursive CTE requires UNION or UNION ALL")
        return self._with(name, query, recursive=True)

    def _with(self, name: str, query: Optional[SelectQuery], recursive: bool) -> SelectQuery:
        if not name:
            raise CTEError("CTE name is required")
        if query is None:
            raise CTEError(f"CTE {name!r} requires a query")
        if not isinstance(query, SelectQuery):
            raise UnsupportedOperandError(f"CTE {name!r} must be a select, got {type(query).__name__}")
        cte = CommonTableExpression(name=name, query=query, recursive=recursive)
        return self.clone_with(ctes=self.ctes + (cte,))

    # --- rendering ---

    def _render_column(self, column: Any, dialect):
        if isinstance(column, str):
            if column == "*" or "(" in column or " as " in column or " AS " in column:
                return column, ()
            return dialect.quote_column(column), ()
        expression = to_expression(column)
        sql, values = expression.render(dialect)
        if isinstance(expression, SubqueryExpression):
            sql = "(" + sql + ")"
        return sql, values

    def _render_with(self, dialect):
        keyword = "WITH RECURSIVE " if any(cte.recursive for cte in self.ctes) else "WITH "
        parts = []
        values = []
        for cte in self.ctes:
            sql, cte_values = cte.query._render(dialect)
            parts.append(f"{dialect.quote_identifier(cte.name)} AS ({sql})")
            values.extend(cte_values)
        return keyword + ", ".join(parts) + " ", values

    def _render_join(self, join: Join, dialect):
        values = ()
        if isinstance(join.target, str):
            target = dialect.quote_table(join.target)
            if join.alias:
                target += " AS " + dialect.quote_identifier(join.alias)
        else:
            sql, values = to_expression(join.target).render(dialect)
            target = f"({sql}) AS {dialect.quote_identifier(join.alias)}"
        sql = f" {join.kind} {target}"
        if join.on is not None:
            if isinstance(join.on, str):
                on_sql, on_values = join.on, ()
            else:
                on_sql, on_values = to_expression(join.on).render(dialect)
            sql += " ON " + on_sql
            values = tuple(values) + tuple(on_values)
        return sql, tuple(values)

    def _render_order(self, dialect) -> str:
        parts = []
        for term in self.order_terms:
            match = _ORDER_TERM.match(term.strip())
            if match:
                parts.append(dialect.quote_column(match.group(1)) + " " + match.group(2).upper())
            elif term.strip():
                parts.append(dialect.quote_column(term.strip()))
        return " ORDER BY " + ", ".join(parts) if parts else ""

    def _render(self, dialect):
        values = []
        sql = ""
        if self.ctes:
            sql, cte_values = self._render_with(dialect)
            values.extend(cte_values)

        columns = []
        for column in self.projection:
            column_sql, column_values = self._render_column(column, dialect)
            columns.append(column_sql)
            values.extend(column_values)
        sql += "SELECT " + ("DISTINCT " if self.is_distinct else "") + (", ".join(columns) or "*")

        if self.source_query is not None:
            source_sql, source_values = self.source_query._render(dialect)
            sql += f" FROM ({source_sql}) AS {dialect.quote_identifier(self.source_alias)}"
            values.extend(source_values)
        elif self.source:
            sql += " FROM " + dialect.quote_table(self.source)

        for join in self.joins:
            join_sql, join_values = self._render_join(join, dialect)
            sql += join_sql
            values.extend(join_values)

        where_sql, where_values = self._render_where(dialect)
        sql += where_sql
        values.extend(where_values)

        if self.group_columns:
            sql += " GROUP BY " + ", ".join(map(dialect.quote_column, self.group_columns))

        having_sql, having_values = ConditionList(conditions=self.having_conditions).render(dialect)
        if having_sql:
            sql += " HAVING " + having_sql
            values.extend(having_values)

        for operation in self.set_operations:
            operand_sql, operand_values = operation.query._render(dialect)
            if _needs_parentheses(operation.query):
                operand_sql = "(" + operand_sql + ")"
            sql += f" {operation.operator} {operand_sql}"
            values.extend(operand_values)

        sql += self._render_order(dialect)
        if self.limit_value is not None:
            sql += f" LIMIT {int(self.limit_value)}"
        if self.offset_value is not None:
            sql += f" OFFSET {int(self.offset_value)}"
        return sql, tuple(values)
