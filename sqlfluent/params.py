"""Named-parameter SQL: ``{:name}`` values, ``{{table}}`` and ``[[column]]`` identifiers."""

import re
from typing import Any, Mapping, Tuple

from .errors import MissingParameterError
from .expressions import MARKER

_TOKEN = re.compile(r"\{:(\w+)\}|\{\{(.+?)\}\}|\[\[(.+?)\]\]")


def quote_name(name: str, dialect) -> str:
    """Quote every dotted part of ``name`` (``public.users`` -> ``"public"."users"``)."""
    return ".".join(dialect.quote_identifier(part.strip()) for part in name.split("."))


def expand_named_params(sql: str, params: Mapping[str, Any], dialect) -> Tuple[str, Tuple[Any, ...]]:
    """Rewrite named placeholders to ``?`` markers and collect their values in order.

    A name may appear several times; each occurrence binds its value again.

    Example:
        SELECT * FROM {{users}} WHERE [[id]] = {:id}
        -> SELECT * FROM "users" WHERE "id" = ?   with (params["id"],)
    """
    args = []

    def replace(match: re.Match) -> str:
        name, table, column = match.groups()
        if name is not None:
            if name not in params:
                raise MissingParameterError(name)
            args.append(params[name])
            return MARKER
        return quote_name(table if table is not None else column, dialect)

    return _TOKEN.sub(replace, sql), tuple(args)
