from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from pitchside.db.models.core.league import League
from pitchside.db.repos.base import BaseRepository
from pitchside.ingestion.payloads import LEAGUE_UPDATABLE_COLUMNS, LeaguePayload


class LeagueRepository(BaseRepository[League]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=League)

    def bulk_upsert(self, payloads: Sequence[LeaguePayload]) -> int:
        if not payloads:
            return 0
        self.upsert_rows(
            (p.as_row() for p in payloads), key="id", update_columns=LEAGUE_UPDATABLE_COLUMNS
        )
        return len(payloads)
