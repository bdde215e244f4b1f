"""Final placeholder pass: turns the neutral ``?`` marker into the dialect's syntax."""

from typing import Any, Sequence

from .errors import PlaceholderMismatchError
from .expressions import MARKER


def resolve_placeholders(sql: str, args: Sequence[Any], dialect) -> str:
    """Return ``sql`` with every marker rewritten for ``dialect``.

    The pass is a single left-to-right scan with no knowledge of SQL syntax:
    a ``?`` inside a quoted literal counts as a marker. The marker count must
    equal ``len(args)`` for every dialect, so raw SQL may only contain ``?``
    where a value is bound.

    Generic dialects get the text back unchanged; numbered dialects get
    ``$1``, ``$2``... in order of appearance.
    """
    pieces = sql.split(MARKER)
    count = len(pieces) - 1
    if count != len(args):
        raise PlaceholderMismatchError(
            f"SQL contains {count} placeholder(s) but {len(args)} argument(s) were given: {sql}"
        )
    if dialect.PLACEHOLDER_STYLE != "numbered":
        return sql
    return pieces[0] + "".join(
        dialect.placeholder(index) + piece
        for index, piece in enumerate(pieces[1:], start=1)
    )
