"""Raw SQL expression."""

from typing import Any, Tuple

from pydantic import Field as PydanticField

from ._bases import Expression


class RawExpression(Expression):
    """Verbatim SQL with its own bound values (e.g. ``RawExpression(text="age > ?", params=(18,))``).

    The number of ``?`` in ``text`` must match ``params``; this is checked once
    the enclosing statement is built.
    """

    text: str
    params: Tuple[Any, ...] = PydanticField(default_factory=tuple)

    def render(self, dialect):
        return self.text, tuple(self.params)
