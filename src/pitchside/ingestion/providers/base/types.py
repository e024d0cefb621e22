from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResponsePage:
    """
    One page of a provider listing (players, teams, leagues).
    `items` are the raw records; nothing is normalized at this layer.
    """

    items: list[dict[str, Any]] = field(default_factory=list)
    current_page: int | None = None
    total_pages: int | None = None
