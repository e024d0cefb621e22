from __future__ import annotations

from sqlalchemy.orm import Session

from pitchside.db.models.core.league_team_season import LeagueTeamSeason
from pitchside.db.repos.base import BaseRepository
from pitchside.ingestion.payloads import LeagueTeamSeasonPayload


class LeagueTeamSeasonRepository(BaseRepository[LeagueTeamSeason]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=LeagueTeamSeason)

    def insert_ignore_duplicate(self, payload: LeagueTeamSeasonPayload) -> bool:
        stmt = (
            self.upsert_insert()
            .values(**payload.as_row())
            .on_conflict_do_nothing(index_elements=["league_id", "team_id", "season"])
        )
        return bool(self.session.execute(stmt).rowcount)

    def list_for_league(self, league_id: int, season: int) -> list[LeagueTeamSeason]:
        return self.list_where(
            LeagueTeamSeason.league_id == league_id, LeagueTeamSeason.season == season
        )
