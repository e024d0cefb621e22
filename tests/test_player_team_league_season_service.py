from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

import pitchside.db.models  # noqa: F401
from pitchside.db import DatabaseConfig, create_db_engine
from pitchside.db.base import Base
from pitchside.db.models.core.league import League
from pitchside.db.models.core.player import Player
from pitchside.db.models.core.team import Team
from pitchside.db.repos.core.player_team_league_season_repo import (
    PlayerTeamLeagueSeasonRepository,
)
from pitchside.ingestion.payloads import MappingPayload
from pitchside.services.player_team_league_season import (
    MappingConflictError,
    MappingServiceError,
    PlayerTeamLeagueSeasonService,
)


def _make_session() -> Session:
    engine = create_db_engine(DatabaseConfig(database_url="sqlite+pysqlite:///:memory:"))
    Base.metadata.create_all(engine)
    session = Session(engine)
    session.add(League(id=39, name="Premier League", type="League", country="England"))
    session.add(Team(id=33, name="Manchester United", code="MUN", country="England"))
    session.add(Player(id=100, name="Player One"))
    session.commit()
    return session


def test_create_mapping_record_inserts_row() -> None:
    session = _make_session()
    service = PlayerTeamLeagueSeasonService(session)

    payload = MappingPayload(player_id=100, league_id=39, team_id=33, season=2021)
    assert service.create_mapping_record(payload) == payload

    rows = PlayerTeamLeagueSeasonRepository(session).list_for_player(100)
    assert [(r.league_id, r.team_id, r.season) for r in rows] == [(39, 33, 2021)]


def test_duplicate_mapping_is_treated_as_satisfied() -> None:
    session = _make_session()
    service = PlayerTeamLeagueSeasonService(session)
    payload = MappingPayload(player_id=100, league_id=39, team_id=33, season=2021)

    service.create_mapping_record(payload)
    service.create_mapping_record(payload)

    assert PlayerTeamLeagueSeasonRepository(session).count() == 1


def test_unknown_reference_raises_conflict_and_leaves_session_usable() -> None:
    session = _make_session()
    service = PlayerTeamLeagueSeasonService(session)

    with pytest.raises(MappingConflictError) as exc_info:
        service.create_mapping_record(
            MappingPayload(player_id=100, league_id=999, team_id=33, season=2021)
        )
    assert exc_info.value.http_status == 409

    service.create_mapping_record(
        MappingPayload(player_id=100, league_id=39, team_id=33, season=2022)
    )
    assert PlayerTeamLeagueSeasonRepository(session).count() == 1


def test_non_positive_fields_are_rejected() -> None:
    session = _make_session()
    service = PlayerTeamLeagueSeasonService(session)

    with pytest.raises(MappingServiceError, match="season"):
        service.create_mapping_record(
            MappingPayload(player_id=100, league_id=39, team_id=33, season=0)
        )
