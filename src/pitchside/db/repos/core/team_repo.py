from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from pitchside.db.models.core.team import Team
from pitchside.db.repos.base import BaseRepository
from pitchside.ingestion.payloads import TEAM_UPDATABLE_COLUMNS, TeamPayload


class TeamRepository(BaseRepository[Team]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=Team)

    def bulk_upsert(self, payloads: Sequence[TeamPayload]) -> int:
        if not payloads:
            return 0
        self.upsert_rows(
            (p.as_row() for p in payloads), key="id", update_columns=TEAM_UPDATABLE_COLUMNS
        )
        return len(payloads)
