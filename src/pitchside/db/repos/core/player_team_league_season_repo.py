from __future__ import annotations

from sqlalchemy.orm import Session

from pitchside.db.models.core.player_team_league_season import PlayerTeamLeagueSeason
from pitchside.db.repos.base import BaseRepository
from pitchside.ingestion.payloads import MappingPayload


class PlayerTeamLeagueSeasonRepository(BaseRepository[PlayerTeamLeagueSeason]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=PlayerTeamLeagueSeason)

    def insert_ignore_duplicate(self, payload: MappingPayload) -> bool:
        """Insert one mapping row; an existing identical row is left untouched.

        Returns True when a new row was written, False when it already existed.
        Foreign-key violations are raised as ``IntegrityError``.
        """

        stmt = (
            self.upsert_insert()
            .values(**payload.as_row())
            .on_conflict_do_nothing(
                index_elements=["player_id", "league_id", "team_id", "season"]
            )
        )
        result = self.session.execute(stmt)
        return bool(result.rowcount)

    def list_for_player(self, player_id: int) -> list[PlayerTeamLeagueSeason]:
        return self.list_where(PlayerTeamLeagueSeason.player_id == player_id)
