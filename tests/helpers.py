"""Shared test helpers."""

from sqlfluent.expressions import MARKER


def assert_parity(statement):
    """Assert the neutral SQL of a statement has exactly one marker per argument; return (sql, args)."""
    sql, args = statement.render()
    assert sql.count(MARKER) == len(args), f"{sql.count(MARKER)} markers for {len(args)} args in: {sql}"
    return sql, args


def neutral(sql: str, quote_char: str = '"') -> str:
    """Normalize dialect-specific quoting so renders from different dialects can be compared."""
    return sql.replace(quote_char, "'")
