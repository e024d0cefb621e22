from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pitchside.core.text import parse_positive_int
from pitchside.db.repos.core.league_team_season_repo import LeagueTeamSeasonRepository
from pitchside.ingestion.payloads import LeagueTeamSeasonPayload
from pitchside.services.player_team_league_season import (
    MappingConflictError,
    MappingServiceError,
)

logger = logging.getLogger(__name__)


class LeagueTeamSeasonLinker(Protocol):
    def link_team(self, payload: LeagueTeamSeasonPayload) -> LeagueTeamSeasonPayload:
        ...


class LeagueTeamSeasonService:
    """Records which teams play in a league season; one transaction per link.

    Same duplicate policy as player mappings: an existing link is left as is
    and counts as satisfied.
    """

    def __init__(self, session: Session) -> None:
        self.session = session
        self.repo = LeagueTeamSeasonRepository(session)

    def link_team(self, payload: LeagueTeamSeasonPayload) -> LeagueTeamSeasonPayload:
        for name in ("league_id", "team_id", "season"):
            if parse_positive_int(getattr(payload, name)) is None:
                raise MappingServiceError(f"Field {name} must be a valid positive integer")

        try:
            created = self.repo.insert_ignore_duplicate(payload)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise MappingConflictError(
                "team_id or league_id does not exist in the system"
            ) from e
        except Exception:
            self.session.rollback()
            raise

        if not created:
            logger.debug("League/team/season link already present: %s", payload)
        return payload
