"""Tests for sqlfluent.placeholders.resolve_placeholders."""

import pytest

from sqlfluent.errors import PlaceholderMismatchError
from sqlfluent.placeholders import resolve_placeholders


def test_numbered_dialect_rewrites_left_to_right(postgres):
    """Markers are numbered from left to right."""
    assert resolve_placeholders("a = ? AND b IN (?, ?)", (1, 2, 3), postgres) == "a = $1 AND b IN ($2, $3)"


def test_generic_dialects_pass_through(mysql, sqlite):
    """MySQL and SQLite keep ``?`` markers."""
    sql = "a = ? AND b = ?"
    assert resolve_placeholders(sql, (1, 2), mysql) == sql
    assert resolve_placeholders(sql, (1, 2), sqlite) == sql


def test_no_markers(postgres):
    assert resolve_placeholders("SELECT 1", (), postgres) == "SELECT 1"


def test_marker_at_both_ends(postgres):
    assert resolve_placeholders("? + ?", (1, 2), postgres) == "$1 + $2"


@pytest.mark.parametrize("dialect_fixture", ["postgres", "mysql", "sqlite"])
def test_count_mismatch_raises_for_every_dialect(request, dialect_fixture):
    """A marker/argument count mismatch raises for every dialect."""
    dialect = request.getfixturevalue(dialect_fixture)
    with pytest.raises(PlaceholderMismatchError, match="2 placeholder"):
        resolve_placeholders("a = ? AND b = ?", (1,), dialect)


def test_literal_question_mark_is_reported(pg):
    """A '?' typed inside a string literal is counted as a marker."""
    with pytest.raises(PlaceholderMismatchError):
        pg.select().from_("faq").where("title = 'why?' AND id = ?", 1).build()
