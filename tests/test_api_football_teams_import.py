from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.orm import Session

import pitchside.db.models  # noqa: F401
from pitchside.db import DatabaseConfig, create_db_engine
from pitchside.db.base import Base
from pitchside.db.models.core.league import League
from pitchside.db.models.ingestion.ingested_payload import IngestedPayload
from pitchside.db.repos import (
    LeagueRepository,
    LeagueTeamSeasonRepository,
    PlayerTeamLeagueSeasonRepository,
    TeamRepository,
)
from pitchside.ingestion.errors import ImportParameterError, ServiceNotConfiguredError
from pitchside.ingestion.providers.api_football.ingest.leagues import LeagueImporter
from pitchside.ingestion.providers.api_football.ingest.players import PlayerImporter
from pitchside.ingestion.providers.api_football.ingest.teams import TeamImporter
from pitchside.ingestion.providers.base.types import ResponsePage
from pitchside.ingestion.reconcile import TeamLinkError
from pitchside.services.league_team_season import LeagueTeamSeasonService
from pitchside.services.player_team_league_season import PlayerTeamLeagueSeasonService


def _make_session() -> Session:
    engine = create_db_engine(DatabaseConfig(database_url="sqlite+pysqlite:///:memory:"))
    Base.metadata.create_all(engine)
    return Session(engine)


def _team_item(team_id: Any, name: str | None = "Team") -> dict:
    return {"team": {"id": team_id, "name": name, "country": "England"}, "venue": {"id": 1}}


LEAGUE_ITEM = {
    "league": {"id": 39, "name": "Premier League", "type": "League"},
    "country": {"name": "England"},
}


class FakeSource:
    def __init__(
        self,
        *,
        leagues: list[dict] | None = None,
        teams: list[dict] | None = None,
        players: list[dict] | None = None,
    ) -> None:
        self.leagues = leagues or []
        self.teams = teams or []
        self.players = players or []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def fetch_leagues(
        self,
        *,
        league: int | None = None,
        season: int | None = None,
        country: str | None = None,
    ) -> ResponsePage:
        self.calls.append(("leagues", {"league": league, "season": season, "country": country}))
        return ResponsePage(items=self.leagues, current_page=1, total_pages=1)

    def fetch_teams_page(self, *, league: int, season: int) -> ResponsePage:
        self.calls.append(("teams", {"league": league, "season": season}))
        return ResponsePage(items=self.teams, current_page=1, total_pages=1)

    def fetch_players_page(
        self, *, season: int, league: int, team: int, page: int = 1
    ) -> ResponsePage:
        self.calls.append(("players", {"season": season, "team": team, "page": page}))
        return ResponsePage(items=self.players, current_page=page, total_pages=1)


def _team_importer(session: Session, source: FakeSource) -> TeamImporter:
    return TeamImporter(
        session,
        source=source,
        linker=LeagueTeamSeasonService(session),
        store_ingested_payloads=False,
    )


def test_fresh_database_import_chain_links_every_player() -> None:
    session = _make_session()
    source = FakeSource(
        leagues=[LEAGUE_ITEM],
        teams=[_team_item(33, "Manchester United"), _team_item(34, "Newcastle")],
        players=[
            {"player": {"id": 100, "name": "A"}, "statistics": [{"team": {"id": 33}}]},
            {"player": {"id": 101, "name": "B"}, "statistics": [{"team": {"id": 33}}]},
        ],
    )

    leagues = LeagueImporter(session, source=source, store_ingested_payloads=False)
    assert leagues.import_leagues({"league": 39}).imported == 1

    teams = _team_importer(session, source).import_teams({"league": 39, "season": 2021})
    assert (teams.imported, teams.mappings_inserted, teams.mapping_errors) == (2, 2, [])

    players = PlayerImporter(
        session,
        source=source,
        mapping_service=PlayerTeamLeagueSeasonService(session),
        store_ingested_payloads=False,
    ).import_page({"season": 2021, "league": 39, "team": 33})

    assert players.imported == 2
    assert players.mappings_inserted == 2
    assert players.mapping_errors == []
    assert PlayerTeamLeagueSeasonRepository(session).count() == 2


def test_import_teams_upserts_and_links_each_team_once() -> None:
    session = _make_session()
    LeagueRepository(session).add(League(id=39, name="Premier League"))
    session.commit()
    source = FakeSource(teams=[_team_item(33, "Man Utd"), _team_item(33, "Manchester United")])

    summary = _team_importer(session, source).import_teams({"league": "39", "season": "2021"})

    assert summary.to_dict() == {
        "imported": 2,
        "mappings_inserted": 1,
        "mapping_errors": [],
        "season": 2021,
        "league": 39,
        "total_pages": 1,
    }
    team = TeamRepository(session).get(33)
    assert team is not None
    assert team.name == "Manchester United"
    assert LeagueTeamSeasonRepository(session).count() == 1


def test_import_teams_reports_link_errors_without_undoing_teams() -> None:
    session = _make_session()
    source = FakeSource(teams=[_team_item(33), _team_item(34)])

    summary = _team_importer(session, source).import_teams({"league": 39, "season": 2021})

    assert summary.imported == 2
    assert summary.mappings_inserted == 0
    reason = "team_id or league_id does not exist in the system"
    assert summary.mapping_errors == [
        TeamLinkError(team_id=33, reason=reason),
        TeamLinkError(team_id=34, reason=reason),
    ]
    assert TeamRepository(session).count() == 2


def test_import_teams_skips_invalid_records_and_reports_empty_pages() -> None:
    session = _make_session()

    empty = _team_importer(session, FakeSource()).import_teams({"league": 39, "season": 2021})
    assert empty.message == "No teams found"

    invalid = _team_importer(
        session, FakeSource(teams=[_team_item(None), _team_item(35, name=None)])
    ).import_teams({"league": 39, "season": 2021})
    assert invalid.imported == 0
    assert invalid.message == "No valid teams to save"
    assert TeamRepository(session).count() == 0


def test_import_teams_validates_parameters_before_fetch() -> None:
    source = FakeSource(teams=[_team_item(33)])

    with pytest.raises(ImportParameterError) as exc_info:
        _team_importer(_make_session(), source).import_teams({"league": 39, "season": "x"})

    assert exc_info.value.field == "season"
    assert source.calls == []


def test_import_teams_without_linker_raises_after_teams_saved() -> None:
    session = _make_session()
    importer = TeamImporter(
        session,
        source=FakeSource(teams=[_team_item(33)]),
        resolve_linker=lambda: None,
        store_ingested_payloads=False,
    )

    with pytest.raises(ServiceNotConfiguredError):
        importer.import_teams({"league": 39, "season": 2021})
    assert TeamRepository(session).count() == 1


def test_import_teams_archives_raw_payloads() -> None:
    session = _make_session()
    importer = TeamImporter(
        session,
        source=FakeSource(teams=[_team_item(33)]),
        linker=LeagueTeamSeasonService(session),
        store_ingested_payloads=True,
    )

    importer.import_teams({"league": 39, "season": 2021})

    rows = session.query(IngestedPayload).all()
    assert [(r.entity_type, r.entity_key) for r in rows] == [("team", "33")]


def test_import_leagues_requires_a_filter() -> None:
    source = FakeSource(leagues=[LEAGUE_ITEM])
    importer = LeagueImporter(_make_session(), source=source, store_ingested_payloads=False)

    with pytest.raises(ImportParameterError, match="league or country is required"):
        importer.import_leagues({"season": 2021})
    assert source.calls == []


def test_import_leagues_by_country_upserts_and_echoes_filters() -> None:
    session = _make_session()
    source = FakeSource(leagues=[LEAGUE_ITEM, {"league": {"id": None, "name": "Broken"}}])
    importer = LeagueImporter(session, source=source, store_ingested_payloads=False)

    summary = importer.import_leagues({"country": " England ", "season": "2021"})

    assert summary.to_dict() == {
        "imported": 1,
        "league": None,
        "season": 2021,
        "country": "England",
    }
    assert source.calls == [("leagues", {"league": None, "season": 2021, "country": "England"})]
    league = LeagueRepository(session).get(39)
    assert league is not None
    assert (league.name, league.country) == ("Premier League", "England")
