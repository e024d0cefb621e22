from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from pitchside.db.models.core.player import Player
from pitchside.db.repos.base import BaseRepository
from pitchside.ingestion.payloads import (
    PLAYER_IDENTITY_COLUMN,
    PLAYER_UPDATABLE_COLUMNS,
    PlayerPayload,
)


class PlayerRepository(BaseRepository[Player]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=Player)

    def bulk_upsert(self, payloads: Sequence[PlayerPayload]) -> int:
        """Insert players, rewriting descriptive columns when the id already exists.

        Runs as a single statement. When an id repeats inside ``payloads`` the
        last occurrence wins. Returns the number of payloads submitted.
        """

        if not payloads:
            return 0

        self.upsert_rows(
            (p.as_row() for p in payloads),
            key=PLAYER_IDENTITY_COLUMN,
            update_columns=PLAYER_UPDATABLE_COLUMNS,
        )
        return len(payloads)
