"""Tests for AND/OR/NOT and EXISTS expressions."""

import pytest

from sqlfluent.errors import UnsupportedOperandError
from sqlfluent.expressions import and_, eq, exists, gt, in_, not_, not_exists, or_, raw


def test_and_parenthesizes_each_operand(postgres):
    assert and_(eq("a", 1), gt("b", 2)).render(postgres) == ('("a"=?) AND ("b">?)', (1, 2))


def test_or_parenthesizes_each_operand(postgres):
    assert or_(eq("a", 1), eq("a", 2), eq("a", 3)).render(postgres) == (
        '("a"=?) OR ("a"=?) OR ("a"=?)', (1, 2, 3)
    )


def test_single_operand_is_unwrapped(postgres):
    """A single surviving operand is not parenthesized."""
    assert and_(eq("a", 1)).render(postgres) == ('"a"=?', (1,))
    assert or_(None, eq("a", 1), None).render(postgres) == ('"a"=?', (1,))


def test_none_and_empty_operands_are_dropped(postgres):
    """None and empty operands are filtered out."""
    assert and_(None, in_("x"), not_(None), eq("a", 1), raw("")).render(postgres) == (
        '(0=1) AND ("a"=?)', (1,)
    )
    assert and_().render(postgres) == ("", ())
    assert or_(None, None).render(postgres) == ("", ())


def test_nested_logical(postgres):
    expr = and_(eq("status", "active"), or_(eq("role", "admin"), gt("age", 30)))
    assert expr.render(postgres) == (
        '("status"=?) AND (("role"=?) OR ("age">?))', ("active", "admin", 30)
    )


def test_logical_rejects_non_expressions(postgres):
    """Logical operands must be expressions."""
    with pytest.raises(UnsupportedOperandError, match="str"):
        and_("a = 1", eq("b", 2)).render(postgres)


def test_not(postgres):
    assert not_(eq("a", 1)).render(postgres) == ('NOT ("a"=?)', (1,))
    assert not_(None).render(postgres) == ("", ())
    assert not_(raw("")).render(postgres) == ("", ())


def test_exists_subquery(pg, postgres):
    """EXISTS wraps a select in parentheses and keeps its values."""
    sub = pg.select("1").from_("orders").where("orders.user_id = users.id").where("total > ?", 50)
    sql, values = exists(sub).render(postgres)
    assert sql == 'EXISTS (SELECT 1 FROM "orders" WHERE orders.user_id = users.id AND total > ?)'
    assert values == (50,)
    assert not_exists(sub).render(postgres)[0].startswith("NOT EXISTS (SELECT")


def test_exists_raw(postgres):
    assert exists(raw("SELECT 1 FROM t WHERE x = ?", 1)).render(postgres) == (
        "EXISTS (SELECT 1 FROM t WHERE x = ?)", (1,)
    )


def test_exists_degenerate_cases(postgres):
    """Empty EXISTS is always false; empty NOT EXISTS renders nothing."""
    assert exists(None).render(postgres) == ("0=1", ())
    assert not_exists(None).render(postgres) == ("", ())
    assert exists(raw("")).render(postgres) == ("0=1", ())
    assert not_exists(raw("")).render(postgres) == ("", ())
