from __future__ import annotations

import logging
from typing import ClassVar, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pitchside.core.text import parse_positive_int
from pitchside.db.repos.core.player_team_league_season_repo import (
    PlayerTeamLeagueSeasonRepository,
)
from pitchside.ingestion.payloads import MappingPayload

logger = logging.getLogger(__name__)

MAPPING_FIELDS = ("player_id", "league_id", "team_id", "season")


class MappingServiceError(ValueError):
    http_status: ClassVar[int] = 400


class MappingConflictError(MappingServiceError):
    """Referenced player, league or team does not exist locally."""

    http_status: ClassVar[int] = 409


class MappingService(Protocol):
    def create_mapping_record(self, payload: MappingPayload) -> MappingPayload:
        ...


def _validate(payload: MappingPayload) -> MappingPayload:
    for name in MAPPING_FIELDS:
        if parse_positive_int(getattr(payload, name)) is None:
            raise MappingServiceError(f"Field {name} must be a valid positive integer")
    return payload


class PlayerTeamLeagueSeasonService:
    """Writes player/team/league/season facts, one transaction per record.

    Duplicate policy: create, and treat an existing identical row as already
    satisfied (`INSERT ... ON CONFLICT DO NOTHING`). No read-before-write.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = PlayerTeamLeagueSeasonRepository(session)

    def create_mapping_record(self, payload: MappingPayload) -> MappingPayload:
        data = _validate(payload)
        try:
            created = self.repo.insert_ignore_duplicate(data)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise MappingConflictError(
                "player_id, team_id or league_id does not exist in the system"
            ) from e
        except Exception:
            self.session.rollback()
            raise

        if not created:
            logger.debug("Mapping already present: %s", data)
        return data
