from __future__ import annotations

from typing import Protocol

from .types import ResponsePage


class PlayersPageSource(Protocol):
    """
    Orchestration depends on these protocols, not on any HTTP client.

    Implementations surface transport failures as ProviderRequestError and
    timeouts as ProviderTimeoutError.
    """

    def fetch_players_page(
        self, *, season: int, league: int, team: int, page: int = 1
    ) -> ResponsePage:
        ...


class TeamsSource(Protocol):
    def fetch_teams_page(self, *, league: int, season: int) -> ResponsePage:
        ...


class LeaguesSource(Protocol):
    def fetch_leagues(
        self,
        *,
        league: int | None = None,
        season: int | None = None,
        country: str | None = None,
    ) -> ResponsePage:
        ...
