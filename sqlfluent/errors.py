"""Errors raised while composing statements."""


class SqlFluentError(Exception):
    """Base class for every error raised by sqlfluent."""
    pass


class CompositionError(SqlFluentError, ValueError):
    """A statement or expression was composed from invalid parts."""
    pass


class BatchError(CompositionError):
    """Batch insert/update input is malformed (no rows, row width mismatch, no key column)."""
    pass


class CTEError(CompositionError):
    """A common table expression is declared without a name, without a query, or
    (for a recursive one) without a UNION between the anchor and recursive terms."""
    pass


class UnsupportedOperandError(CompositionError, TypeError):
    """A filter received a value that is neither raw SQL, a mapping nor an Expression."""
    pass


class PlaceholderMismatchError(CompositionError):
    """The number of ``?`` markers in the SQL text differs from the number of arguments."""
    pass


class MissingParameterError(CompositionError):
    """A ``{:name}`` placeholder has no matching entry in the parameter mapping."""

    def __init__(self, name: str):
        super().__init__(f"missing parameter: {name}")
        self.name = name
