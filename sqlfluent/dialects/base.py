"""Base Dialect type: subclasses describe identifier quoting, placeholders and upserts for one engine."""

import re
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Sequence

from pydantic import BaseModel

_PLAIN_COLUMN = re.compile(r"^[A-Za-z_][A-Za-z0-9_$]*(\.([A-Za-z_][A-Za-z0-9_$]*|\*))*$")
_TABLE_ALIAS = re.compile(r"^\s*(\S+)\s+(?:[Aa][Ss]\s+)?(\S+)\s*$")


class _DialectF:
    """Helper for dialect.f: __getattr__ returns the callable from the dialect's F config."""

    __slots__ = ("_dialect",)

    def __init__(self, dialect: "Dialect") -> None:
        self._dialect = dialect

    def __getattr__(self, name: str) -> Callable[..., Any]:
        F = type(self._dialect).F  # pylint: disable=invalid-name
        if name in F:
            return F[name]
        raise AttributeError(name)


def _function(name: str) -> Callable[..., str]:
    return lambda *parts: name + "(" + ", ".join(parts) + ")"


class Dialect(BaseModel, ABC):
    """Base for SQL dialects.

    A dialect quotes identifiers immediately (while expressions render) and
    turns the neutral ``?`` marker into its own placeholder syntax during the
    final resolution pass.
    """

    model_config = {"frozen": True}

    SUPPORTED_SCHEMA: ClassVar[tuple[str, ...]] = ()
    """URL schemes and driver names this dialect handles (e.g. ('postgresql', 'postgres'))."""

    QUOTE_CHAR: ClassVar[str] = '"'

    PLACEHOLDER_STYLE: ClassVar[str] = "generic"
    """Either 'generic' (``?`` repeated) or 'numbered' (``$1``, ``$2``...)."""

    F: ClassVar[dict[str, Callable[..., str]]] = {
        "concat": lambda *parts: " || ".join(parts),
        "greatest": _function("GREATEST"),
        "least": _function("LEAST"),
    }
    """Dialect-specific SQL helpers taking rendered fragments. Access via dialect.f.concat(a, b, c)."""

    @property
    def f(self) -> _DialectF:
        """Access dialect-specific helpers by name (e.g. self.f.greatest(a, b))."""
        return _DialectF(self)

    @property
    def name(self) -> str:
        return self.SUPPORTED_SCHEMA[0]

    def quote_identifier(self, name: str) -> str:
        """Quote a single identifier, doubling any embedded quote character."""
        q = self.QUOTE_CHAR
        if len(name) >= 2 and name[0] == q and name[-1] == q:
            return name
        return q + name.replace(q, q + q) + q

    def quote_column(self, name: str) -> str:
        """Quote a possibly table-qualified column name.

        ``users.age`` becomes ``"users"."age"``; ``*`` and ``u.*`` keep the bare star.
        Anything that is not a plain (dotted) identifier, such as ``COUNT(*)``
        or ``n + 1``, is SQL already and is returned verbatim.
        """
        if name == "*":
            return name
        if not _PLAIN_COLUMN.match(name):
            return name
        return ".".join(
            part if part == "*" else self.quote_identifier(part)
            for part in name.split(".")
        )

    def quote_table(self, name: str) -> str:
        """Quote a table reference with an optional alias (``users u`` / ``users AS u``)."""
        match = _TABLE_ALIAS.match(name)
        if match:
            table, alias = match.groups()
            return self.quote_column(table) + " AS " + self.quote_identifier(alias)
        return self.quote_column(name.strip())

    def placeholder(self, index: int) -> str:
        """Placeholder for the 1-based argument ``index``."""
        if self.PLACEHOLDER_STYLE == "numbered":
            return f"${index}"
        return "?"

    @abstractmethod
    def upsert_clause(
        self,
        columns: Sequence[str],
        conflict_columns: Sequence[str],
        update_columns: Sequence[str],
        do_nothing: bool = False,
    ) -> str:
        """Return the conflict clause appended to an INSERT (with a leading space).

        ``columns`` are the inserted columns. All names are passed unquoted.
        """
        ...  # pylint: disable=unnecessary-ellipsis


def _on_conflict_clause(dialect: Dialect, excluded: str, conflict_columns: Sequence[str],
                        update_columns: Sequence[str], do_nothing: bool) -> str:
    """``ON CONFLICT (...) DO UPDATE SET c = <excluded>.c`` as understood by PostgreSQL and SQLite."""
    target = ""
    if conflict_columns:
        target = " (" + ", ".join(map(dialect.quote_identifier, conflict_columns)) + ")"
    if do_nothing or not update_columns:
        return " ON CONFLICT" + target + " DO NOTHING"
    assignments = ", ".join(
        f"{col} = {excluded}.{col}"
        for col in map(dialect.quote_identifier, update_columns)
    )
    return " ON CONFLICT" + target + " DO UPDATE SET " + assignments
