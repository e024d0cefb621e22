from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy.orm import Session

from pitchside.core.config import Settings
from pitchside.core.registry import ServiceRegistry
from pitchside.ingestion.errors import ServiceNotConfiguredError
from pitchside.ingestion.providers.api_football.client import ApiFootballClient
from pitchside.ingestion.providers.api_football.ingest.leagues import (
    LeagueImporter,
    LeagueImportSummary,
    parse_league_import_params,
)
from pitchside.ingestion.providers.api_football.ingest.players import (
    PlayerImporter,
    PlayerImportRunSummary,
    parse_import_params,
)
from pitchside.ingestion.providers.api_football.ingest.teams import (
    TeamImporter,
    TeamImportSummary,
    parse_team_import_params,
)
from pitchside.ingestion.providers.base.client import BaseHttpClient
from pitchside.services.league_team_season import LeagueTeamSeasonService
from pitchside.services.player_team_league_season import PlayerTeamLeagueSeasonService

API_FOOTBALL_CLIENT = "services.api_football"
PLAYER_TEAM_LEAGUE_SEASON = "services.player_team_league_season"
LEAGUE_TEAM_SEASON = "services.league_team_season"
PLAYER_IMPORTER = "services.player_importer"
TEAM_IMPORTER = "services.team_importer"
LEAGUE_IMPORTER = "services.league_importer"

T = TypeVar("T")


def make_api_football_http(cfg: Settings) -> BaseHttpClient:
    return BaseHttpClient(
        base_url=cfg.api_football_base_url,
        timeout_s=cfg.api_football_timeout_s,
        headers={"x-rapidapi-host": "v3.football.api-sports.io"},
    )


def register_api_football_module(
    registry: ServiceRegistry,
    *,
    http: BaseHttpClient,
    api_key: str,
) -> None:
    registry.register_if_missing(
        API_FOOTBALL_CLIENT,
        lambda: ApiFootballClient(http=http, api_key=api_key),
    )


def register_players_module(registry: ServiceRegistry, *, session: Session) -> None:
    # The mapping service module may register after this one, so it is
    # looked up through a resolver at import time instead of here.
    registry.register_if_missing(
        PLAYER_IMPORTER,
        lambda: PlayerImporter(
            session,
            source=registry.get(API_FOOTBALL_CLIENT),
            resolve_mapping_service=registry.resolver(PLAYER_TEAM_LEAGUE_SEASON),
        ),
    )


def register_teams_module(registry: ServiceRegistry, *, session: Session) -> None:
    registry.register_if_missing(
        TEAM_IMPORTER,
        lambda: TeamImporter(
            session,
            source=registry.get(API_FOOTBALL_CLIENT),
            resolve_linker=registry.resolver(LEAGUE_TEAM_SEASON),
        ),
    )
    registry.register_if_missing(
        LEAGUE_IMPORTER,
        lambda: LeagueImporter(session, source=registry.get(API_FOOTBALL_CLIENT)),
    )


def register_player_team_league_season_module(
    registry: ServiceRegistry, *, session: Session
) -> None:
    registry.register_if_missing(
        PLAYER_TEAM_LEAGUE_SEASON,
        lambda: PlayerTeamLeagueSeasonService(session),
    )


def register_league_team_season_module(registry: ServiceRegistry, *, session: Session) -> None:
    registry.register_if_missing(LEAGUE_TEAM_SEASON, lambda: LeagueTeamSeasonService(session))


def build_import_registry(
    *,
    session: Session,
    http: BaseHttpClient,
    api_key: str,
) -> ServiceRegistry:
    registry = ServiceRegistry()
    register_api_football_module(registry, http=http, api_key=api_key)
    register_players_module(registry, session=session)
    register_teams_module(registry, session=session)
    register_player_team_league_season_module(registry, session=session)
    register_league_team_season_module(registry, session=session)
    return registry


@contextmanager
def _import_registry(session: Session, cfg: Settings) -> Iterator[ServiceRegistry]:
    try:
        api_key = cfg.require_api_football_key()
    except RuntimeError as e:
        raise ServiceNotConfiguredError(str(e)) from e

    http = make_api_football_http(cfg)
    try:
        yield build_import_registry(session=session, http=http, api_key=api_key)
    finally:
        http.close()


def _run(session: Session, cfg: Settings, key: str, call: Callable[..., T]) -> T:
    with _import_registry(session, cfg) as registry:
        return call(registry.get(key))


def import_api_football_players(
    session: Session,
    *,
    cfg: Settings,
    season: int | str,
    league: int | str,
    team: int | str,
    page: int | str | None = None,
    all_pages: bool = False,
    max_pages: int | None = None,
) -> PlayerImportRunSummary:
    """Wire the API-Football client and services from settings, then import.

    Imports a single page unless `all_pages` is set.
    """

    raw_query = {"season": season, "league": league, "team": team, "page": page}
    # Validate before touching the network or the API key.
    parse_import_params(raw_query)

    def run(importer: PlayerImporter) -> PlayerImportRunSummary:
        if all_pages:
            return importer.import_all_pages(raw_query, max_pages=max_pages)
        summary = importer.import_page(raw_query)
        return PlayerImportRunSummary(pages=[summary], total_pages=summary.total_pages)

    return _run(session, cfg, PLAYER_IMPORTER, run)


def import_api_football_teams(
    session: Session,
    *,
    cfg: Settings,
    league: int | str,
    season: int | str,
) -> TeamImportSummary:
    raw_query = {"league": league, "season": season}
    parse_team_import_params(raw_query)
    return _run(session, cfg, TEAM_IMPORTER, lambda i: i.import_teams(raw_query))


def import_api_football_leagues(
    session: Session,
    *,
    cfg: Settings,
    league: int | str | None = None,
    season: int | str | None = None,
    country: str | None = None,
) -> LeagueImportSummary:
    raw_query = {"league": league, "season": season, "country": country}
    parse_league_import_params(raw_query)
    return _run(session, cfg, LEAGUE_IMPORTER, lambda i: i.import_leagues(raw_query))
