from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pitchside.core.text import clean_str
from pitchside.ingestion.errors import ImportParameterError

_MISSING: Any = object()


def query_positive_int(
    raw_query: Mapping[str, Any], name: str, *, default: Any = _MISSING
) -> Any:
    """Read a positive int from loosely typed query values.

    Missing or blank values return ``default``, or raise when there is none.
    "12abc", 1.5 and booleans are rejected rather than truncated.
    """

    value = raw_query.get(name)
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "":
        if default is _MISSING:
            raise ImportParameterError(name, f"{name} is required")
        return default

    parsed: int | None = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, str) and value.isascii() and value.isdigit():
        parsed = int(value)
    if parsed is None or parsed < 1:
        raise ImportParameterError(name, f"{name} must be a positive integer")
    return parsed


def query_str(raw_query: Mapping[str, Any], name: str) -> str | None:
    return clean_str(raw_query.get(name))
