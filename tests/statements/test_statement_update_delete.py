"""Tests for UpdateQuery and DeleteQuery."""

import pytest

from sqlfluent.errors import CompositionError
from sqlfluent.expressions import eq, raw


def test_update_sorts_assignments(pg):
    """SET assignments are sorted by column."""
    stmt = pg.update("users", {"name": "Alice", "age": 30}).where("id = ?", 1).build()
    assert stmt.sql == 'UPDATE "users" SET "age" = $1, "name" = $2 WHERE id = $3'
    assert stmt.args == (30, "Alice", 1)


def test_update_set_merges(mysql):
    from sqlfluent import QueryBuilder
    stmt = QueryBuilder(mysql).update("users").set({"name": "Bob"}).set(age=41).where(eq("id", 7)).build()
    assert stmt.sql == "UPDATE `users` SET `age` = ?, `name` = ? WHERE `id`=?"
    assert stmt.args == (41, "Bob", 7)


def test_update_expression_value_is_inlined(pg):
    """An expression value is inlined instead of bound."""
    stmt = pg.update("counters", {"hits": raw('"hits" + ?', 1)}).where({"id": 3}).build()
    assert stmt.sql == 'UPDATE "counters" SET "hits" = "hits" + $1 WHERE "id"=$2'
    assert stmt.args == (1, 3)


def test_update_or_where(pg):
    """UPDATE supports the same filter chaining as SELECT."""
    sql, _ = pg.update("users", {"active": False}).where("a = 1").and_where("b = 2").or_where("c = 3").render()
    assert sql == 'UPDATE "users" SET "active" = ? WHERE (a = 1 AND b = 2) OR (c = 3)'


def test_update_without_assignments_raises(pg):
    """An UPDATE with nothing to set cannot be built."""
    with pytest.raises(CompositionError, match="no assignments"):
        pg.update("users").build()


def test_delete(pg):
    stmt = pg.delete("users").where(eq("id", 5)).build()
    assert stmt.sql == 'DELETE FROM "users" WHERE "id"=$1'
    assert stmt.args == (5,)


def test_delete_without_where(sqlite):
    """DELETE without filters has no WHERE clause."""
    from sqlfluent import QueryBuilder
    assert QueryBuilder(sqlite).delete("sessions").build().sql == 'DELETE FROM "sessions"'
