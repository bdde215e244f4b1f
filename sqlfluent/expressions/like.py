"""LIKE expression."""

from typing import Tuple

from pydantic import Field as PydanticField

from ..errors import CompositionError
from ._bases import Expression, MARKER

DEFAULT_LIKE_ESCAPE: Tuple[str, ...] = ("\\", "\\\\", "%", "\\%", "_", "\\_")
"""Replacement pairs applied to each pattern before wildcards are added."""


class LikeExpression(Expression):
    """``column [NOT] LIKE ?`` for each pattern, joined with AND (or OR when ``any_of``).

    Patterns are escaped first, then wrapped with ``%`` on the sides selected
    by ``left``/``right`` (both by default, i.e. a substring match).
    """

    column: str
    patterns: Tuple[str, ...] = PydanticField(default_factory=tuple)
    negated: bool = False
    any_of: bool = False
    left: bool = True
    right: bool = True
    escape: Tuple[str, ...] = DEFAULT_LIKE_ESCAPE

    def match(self, left: bool, right: bool) -> "LikeExpression":
        """Choose which sides get a ``%`` wildcard (``match(False, True)`` is a prefix match)."""
        return self.model_copy(update={"left": left, "right": right})

    def escape_chars(self, *chars: str) -> "LikeExpression":
        """Replace the escape pairs: ``escape_chars("%", "\\%")``. Pass nothing to disable escaping."""
        if len(chars) % 2:
            raise CompositionError("escape_chars requires an even number of strings")
        return self.model_copy(update={"escape": tuple(chars)})

    def render(self, dialect):
        if not self.patterns:
            return "", ()
        col = dialect.quote_column(self.column)
        op = "NOT LIKE" if self.negated else "LIKE"
        values = []
        for pattern in self.patterns:
            for old, new in zip(self.escape[::2], self.escape[1::2]):
                pattern = pattern.replace(old, new)
            if self.left:
                pattern = "%" + pattern
            if self.right:
                pattern += "%"
            values.append(pattern)
        joiner = " OR " if self.any_of else " AND "
        return joiner.join(f"{col} {op} {MARKER}" for _ in values), tuple(values)
