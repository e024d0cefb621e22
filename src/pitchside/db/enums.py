from __future__ import annotations

from enum import StrEnum


class ProviderEnum(StrEnum):
    API_FOOTBALL = "api_football"


class IngestedEntityEnum(StrEnum):
    PLAYER = "player"
    TEAM = "team"
    LEAGUE = "league"
