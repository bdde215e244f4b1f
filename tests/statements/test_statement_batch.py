"""Tests for BatchInsertQuery and BatchUpdateQuery."""

import pytest

from sqlfluent.errors import BatchError
from tests.helpers import assert_parity


def test_batch_insert(pg):
    """Rows are rendered in order with columns in declared order."""
    stmt = pg.batch_insert("users", ["name", "age"]).values("Alice", 30).values("Bob", 25).build()
    assert stmt.sql == 'INSERT INTO "users" ("name", "age") VALUES ($1, $2), ($3, $4)'
    assert stmt.args == ("Alice", 30, "Bob", 25)


def test_batch_insert_values_map_fills_missing(mysql):
    """values_map binds missing columns as NULL."""
    from sqlfluent import QueryBuilder
    stmt = QueryBuilder(mysql).batch_insert("users", ["name", "age"]).values_map({"name": "Carol"}).build()
    assert stmt.sql == "INSERT INTO `users` (`name`, `age`) VALUES (?, ?)"
    assert stmt.args == ("Carol", None)


def test_batch_insert_value_count_mismatch_raises_at_call(pg):
    """A row of the wrong width is rejected when it is added."""
    query = pg.batch_insert("users", ["name", "age"])
    with pytest.raises(BatchError, match="value count mismatch: expected 2, got 1"):
        query.values("Alice")


def test_batch_insert_unknown_column_raises(pg):
    with pytest.raises(BatchError, match="unknown columns: email"):
        pg.batch_insert("users", ["name"]).values_map({"name": "A", "email": "a@x"})


def test_batch_insert_without_rows_raises(pg):
    """Building an empty batch raises BatchError."""
    with pytest.raises(BatchError, match="no rows"):
        pg.batch_insert("users", ["name"]).build()


def test_batch_update(pg):
    """One CASE per column, then the keys for the trailing IN."""
    stmt = (
        pg.batch_update("users", "id")
        .set(1, {"name": "A", "age": 30})
        .set(2, {"name": "B"})
        .build()
    )
    assert stmt.sql == (
        'UPDATE "users" SET "age" = CASE "id" WHEN $1 THEN $2 ELSE "age" END, '
        '"name" = CASE "id" WHEN $3 THEN $4 WHEN $5 THEN $6 ELSE "name" END '
        'WHERE "id" IN ($7, $8)'
    )
    assert stmt.args == (1, 30, 1, "A", 2, "B", 1, 2)


def test_batch_update_ignores_key_column_in_values(pg):
    """The key column is never assigned."""
    sql, args = assert_parity(pg.batch_update("users", "id").set(1, {"id": 1, "name": "A"}))
    assert sql == 'UPDATE "users" SET "name" = CASE "id" WHEN ? THEN ? ELSE "name" END WHERE "id" IN (?)'
    assert args == (1, "A", 1)


def test_batch_update_errors(pg):
    """No rows, no columns and no key column all raise BatchError."""
    with pytest.raises(BatchError, match="no rows"):
        pg.batch_update("users", "id").build()
    with pytest.raises(BatchError, match="no columns"):
        pg.batch_update("users", "id").set(1, {}).build()
    with pytest.raises(BatchError, match="key column"):
        pg.batch_update("users", "")
