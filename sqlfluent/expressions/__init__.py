"""SQL expression trees and the factory functions used to build them.

Every expression renders to a SQL fragment using ``?`` for bound values, plus
the values in marker order::

    sql, values = and_(eq("status", "active"), in_("role", "admin", "owner")).render(dialect)
"""

from typing import Any, Mapping, Optional

from ._bases import MARKER, Expression, render_argument, render_bound, to_expression
from .between import BetweenExpression
from .compare import CompareExpression
from .exists import ExistsExpression
from .function import (
    CaseExpression,
    CoalesceExpression,
    ConcatExpression,
    FunctionExpression,
    GreatestLeastExpression,
    NullIfExpression,
)
from .hash import HashExpression
from .like import DEFAULT_LIKE_ESCAPE, LikeExpression
from .logical import AndOrExpression, NotExpression
from .membership import InExpression
from .raw import RawExpression
from .subquery import SubqueryExpression


def raw(text: str, *params: Any) -> RawExpression:
    """Verbatim SQL with positional ``?`` params."""
    return RawExpression(text=text, params=params)


def all_eq(mapping: Optional[Mapping[str, Any]] = None, **columns: Any) -> HashExpression:
    """Equality on every given column (``all_eq(status="active", deleted_at=None)``)."""
    return HashExpression(mapping={**(mapping or {}), **columns})


def eq(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator="=", value=value)


def not_eq(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator="<>", value=value)


def gt(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator=">", value=value)


def lt(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator="<", value=value)


def gte(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator=">=", value=value)


def lte(column: str, value: Any) -> CompareExpression:
    return CompareExpression(column=column, operator="<=", value=value)


def _membership_values(values: tuple) -> tuple:
    # in_("id", [1, 2, 3]) is accepted as well as in_("id", 1, 2, 3)
    if len(values) == 1 and isinstance(values[0], (list, tuple, set, frozenset)):
        return tuple(values[0])
    return values


def in_(column: str, *values: Any) -> InExpression:
    """``column IN (...)``; a single select statement is used as a subquery."""
    return InExpression(column=column, values=_membership_values(values))


def not_in(column: str, *values: Any) -> InExpression:
    return InExpression(column=column, values=_membership_values(values), negated=True)


def between(column: str, low: Any, high: Any) -> BetweenExpression:
    return BetweenExpression(column=column, low=low, high=high)


def not_between(column: str, low: Any, high: Any) -> BetweenExpression:
    return BetweenExpression(column=column, low=low, high=high, negated=True)


def like(column: str, *patterns: str) -> LikeExpression:
    """Substring match on every pattern (joined with AND); see ``LikeExpression.match``."""
    return LikeExpression(column=column, patterns=patterns)


def not_like(column: str, *patterns: str) -> LikeExpression:
    return LikeExpression(column=column, patterns=patterns, negated=True)


def or_like(column: str, *patterns: str) -> LikeExpression:
    return LikeExpression(column=column, patterns=patterns, any_of=True)


def or_not_like(column: str, *patterns: str) -> LikeExpression:
    return LikeExpression(column=column, patterns=patterns, negated=True, any_of=True)


def and_(*operands: Any) -> AndOrExpression:
    return AndOrExpression(operator="AND", operands=operands)


def or_(*operands: Any) -> AndOrExpression:
    return AndOrExpression(operator="OR", operands=operands)


def not_(operand: Any) -> NotExpression:
    return NotExpression(operand=operand)


def exists(operand: Any) -> ExistsExpression:
    """``EXISTS (subquery)``; accepts a select statement or an expression."""
    return ExistsExpression(operand=operand)


def not_exists(operand: Any) -> ExistsExpression:
    return ExistsExpression(operand=operand, negated=True)


def case(column: str) -> CaseExpression:
    """Simple CASE on ``column``: ``case("status").when(1, "on").else_("off")``."""
    return CaseExpression(column=column)


def case_when() -> CaseExpression:
    """Searched CASE: ``case_when().when("age < 18", "minor").else_("adult")``."""
    return CaseExpression()


def coalesce(*arguments: Any) -> CoalesceExpression:
    return CoalesceExpression(arguments=arguments)


def nullif(left: Any, right: Any) -> NullIfExpression:
    return NullIfExpression(left=left, right=right)


def greatest(*arguments: Any) -> GreatestLeastExpression:
    return GreatestLeastExpression(function="greatest", arguments=arguments)


def least(*arguments: Any) -> GreatestLeastExpression:
    return GreatestLeastExpression(function="least", arguments=arguments)


def concat(*arguments: Any) -> ConcatExpression:
    return ConcatExpression(arguments=arguments)


__all__ = [
    "MARKER",
    "DEFAULT_LIKE_ESCAPE",
    "Expression",
    "RawExpression",
    "HashExpression",
    "CompareExpression",
    "InExpression",
    "BetweenExpression",
    "LikeExpression",
    "AndOrExpression",
    "NotExpression",
    "ExistsExpression",
    "SubqueryExpression",
    "FunctionExpression",
    "CaseExpression",
    "CoalesceExpression",
    "NullIfExpression",
    "GreatestLeastExpression",
    "ConcatExpression",
    "to_expression",
    "render_argument",
    "render_bound",
    "raw",
    "all_eq",
    "eq",
    "not_eq",
    "gt",
    "lt",
    "gte",
    "lte",
    "in_",
    "not_in",
    "between",
    "not_between",
    "like",
    "not_like",
    "or_like",
    "or_not_like",
    "and_",
    "or_",
    "not_",
    "exists",
    "not_exists",
    "case",
    "case_when",
    "coalesce",
    "nullif",
    "greatest",
    "least",
    "concat",
]
