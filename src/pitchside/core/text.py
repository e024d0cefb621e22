from __future__ import annotations

from datetime import date
from typing import Any


def clean_str(value: Any) -> str | None:
    """Trim a provider string; empty or missing values become ``None``."""

    if value is None:
        return None
    v = str(value).strip()
    return v or None


def parse_int(value: Any) -> int | None:
    """Lenient integer parse: accepts ints and numeric strings, else ``None``."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def parse_positive_int(value: Any) -> int | None:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return None
    return parsed


def parse_iso_date(value: Any) -> date | None:
    v = clean_str(value)
    if v is None:
        return None
    try:
        return date.fromisoformat(v[:10])
    except ValueError:
        return None
