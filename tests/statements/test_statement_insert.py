"""Tests for InsertQuery and UpsertQuery across dialects."""

import pytest

from sqlfluent import QueryBuilder
from sqlfluent.errors import CompositionError
from sqlfluent.expressions import raw

ROW = {"id": 1, "name": "Alice", "email": "alice@example.com"}


def test_insert_sorts_columns(pg):
    """INSERT columns are sorted."""
    stmt = pg.insert("users", {"name": "Alice", "email": "alice@example.com"}).build()
    assert stmt.sql == 'INSERT INTO "users" ("email", "name") VALUES ($1, $2)'
    assert stmt.args == ("alice@example.com", "Alice")


def test_insert_values_merges_and_inlines_expressions(sqlite):
    """values() merges rows and inlines expressions."""
    stmt = QueryBuilder(sqlite).insert("events").values(kind="login").values({"at": raw("CURRENT_TIMESTAMP")}).build()
    assert stmt.sql == 'INSERT INTO "events" ("at", "kind") VALUES (CURRENT_TIMESTAMP, ?)'
    assert stmt.args == ("login",)


def test_insert_without_values_raises(pg):
    """An INSERT with no values cannot be built."""
    with pytest.raises(CompositionError, match="no values"):
        pg.insert("users").build()


def test_upsert_postgres_default_updates_non_conflict_columns(pg):
    """By default every non-conflict column is updated."""
    stmt = pg.upsert("users", ROW).on_conflict("id").build()
    assert stmt.sql == (
        'INSERT INTO "users" ("email", "id", "name") VALUES ($1, $2, $3) '
        'ON CONFLICT ("id") DO UPDATE SET "email" = EXCLUDED."email", "name" = EXCLUDED."name"'
    )
    assert stmt.args == ("alice@example.com", 1, "Alice")


def test_upsert_explicit_update_columns(pg):
    """do_update limits the updated columns."""
    stmt = pg.upsert("users", ROW).on_conflict("id").do_update("name").build()
    assert stmt.sql.endswith('ON CONFLICT ("id") DO UPDATE SET "name" = EXCLUDED."name"')


def test_upsert_do_nothing(pg):
    assert pg.upsert("users", ROW).on_conflict("id").do_nothing().build().sql.endswith(
        'ON CONFLICT ("id") DO NOTHING'
    )


def test_upsert_sqlite():
    stmt = QueryBuilder("sqlite").upsert("users", ROW).on_conflict("id").build()
    assert stmt.sql == (
        'INSERT INTO "users" ("email", "id", "name") VALUES (?, ?, ?) '
        'ON CONFLICT ("id") DO UPDATE SET "email" = excluded."email", "name" = excluded."name"'
    )


def test_upsert_mysql():
    """MySQL upserts ignore the conflict columns."""
    stmt = QueryBuilder("mysql").upsert("users", ROW).on_conflict("id").build()
    assert stmt.sql == (
        "INSERT INTO `users` (`email`, `id`, `name`) VALUES (?, ?, ?) "
        "ON DUPLICATE KEY UPDATE `email` = VALUES(`email`), `name` = VALUES(`name`)"
    )
    assert stmt.args == ("alice@example.com", 1, "Alice")


def test_upsert_mysql_do_nothing():
    sql = QueryBuilder("mysql").upsert("users", ROW).on_conflict("id").do_nothing().build().sql
    assert sql.endswith("ON DUPLICATE KEY UPDATE `email` = `email`")
