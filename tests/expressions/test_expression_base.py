"""Tests for sqlfluent.expressions._bases: Expression, operator sugar, argument rendering, raw SQL."""

import pytest

from sqlfluent.expressions import (
    AndOrExpression,
    Expression,
    NotExpression,
    RawExpression,
    eq,
    raw,
    render_argument,
    render_bound,
    to_expression,
)


def test_expression_base_render_raises(postgres):
    """The base Expression has no render of its own."""
    with pytest.raises(NotImplementedError, match="render"):
        Expression().render(postgres)


def test_raw_expression_passes_through(postgres):
    """Raw SQL renders verbatim with its params."""
    expr = raw("age > ? AND age < ?", 18, 65)
    assert isinstance(expr, RawExpression)
    assert expr.render(postgres) == ("age > ? AND age < ?", (18, 65))


def test_and_or_invert_operators_build_logical_expressions(postgres):
    """&, | and ~ build AND, OR and NOT nodes."""
    a, b = eq("a", 1), eq("b", 2)
    assert isinstance(a & b, AndOrExpression)
    assert (a & b).render(postgres) == ('("a"=?) AND ("b"=?)', (1, 2))
    assert (a | b).render(postgres) == ('("a"=?) OR ("b"=?)', (1, 2))
    assert isinstance(~a, NotExpression)
    assert (~a).render(postgres) == ('NOT ("a"=?)', (1,))


def test_to_expression():
    expr = eq("a", 1)
    assert to_expression(expr) is expr
    assert to_expression("a") is None
    assert to_expression(42) is None


def test_to_expression_uses_statement_as_expression(pg):
    """Statements become SubqueryExpression through as_expression()."""
    query = pg.select("id").from_("users")
    sub = to_expression(query)
    assert sub is not None
    assert sub.statement is query


def test_render_argument_rules(postgres):
    """Quoted strings are literals, other strings are columns, anything else is bound."""
    assert render_argument("'N/A'", postgres) == ("'N/A'", ())
    assert render_argument("users.name", postgres) == ('"users"."name"', ())
    assert render_argument(5, postgres) == ("?", (5,))
    assert render_argument(raw("NOW()"), postgres) == ("NOW()", ())


def test_render_argument_parenthesizes_subqueries(pg, postgres):
    """A select used as a function argument is parenthesized."""
    query = pg.select("MAX(score)").from_("games").where("player_id = ?", 7)
    assert render_argument(query, postgres) == ('(SELECT MAX(score) FROM "games" WHERE player_id = ?)', (7,))


def test_render_bound_binds_strings(postgres):
    """render_bound binds strings instead of treating them as columns."""
    assert render_bound("active", postgres) == ("?", ("active",))
    assert render_bound(raw('"count" + 1'), postgres) == ('"count" + 1', ())
