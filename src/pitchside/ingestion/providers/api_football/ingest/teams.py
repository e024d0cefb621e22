from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pitchside.core.config import settings
from pitchside.db.enums import IngestedEntityEnum
from pitchside.db.repos.core.team_repo import TeamRepository
from pitchside.ingestion.archive import archive_payloads
from pitchside.ingestion.errors import EntityUpsertError, ServiceNotConfiguredError
from pitchside.ingestion.params import query_positive_int
from pitchside.ingestion.payloads import LeagueTeamSeasonPayload, TeamPayload
from pitchside.ingestion.providers.api_football.normalizer import normalize_team_item
from pitchside.ingestion.providers.base.adapter import TeamsSource
from pitchside.ingestion.reconcile import TeamLinkError, reconcile_team_links
from pitchside.services.league_team_season import LeagueTeamSeasonLinker

logger = logging.getLogger(__name__)

NO_TEAMS_FOUND = "No teams found"
NO_VALID_TEAMS = "No valid teams to save"


@dataclass(frozen=True)
class TeamImportParams:
    league: int
    season: int


def parse_team_import_params(raw_query: Mapping[str, Any]) -> TeamImportParams:
    return TeamImportParams(
        league=query_positive_int(raw_query, "league"),
        season=query_positive_int(raw_query, "season"),
    )


@dataclass(frozen=True)
class TeamImportSummary:
    imported: int
    mappings_inserted: int = 0
    mapping_errors: list[TeamLinkError] = field(default_factory=list)
    season: int | None = None
    league: int | None = None
    total_pages: int | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["message"] is None:
            del data["message"]
        return data


class TeamImporter:
    """Imports the teams of one league season and links them to it.

    Teams are upserted in one statement and committed; each league/team/season
    link is then written and committed on its own.
    """

    def __init__(
        self,
        session: Session,
        *,
        source: TeamsSource,
        linker: LeagueTeamSeasonLinker | None = None,
        resolve_linker: Callable[[], LeagueTeamSeasonLinker | None] | None = None,
        store_ingested_payloads: bool | None = None,
    ) -> None:
        self.session = session
        self.source = source
        self.team_repo = TeamRepository(session)
        self._linker = linker
        self._resolve_linker = resolve_linker
        if store_ingested_payloads is None:
            store_ingested_payloads = settings.store_ingested_payloads
        self.store_ingested_payloads = store_ingested_payloads

    def _linker_or_raise(self) -> LeagueTeamSeasonLinker:
        linker = self._linker
        if linker is None and self._resolve_linker is not None:
            linker = self._resolve_linker()
        if linker is None:
            raise ServiceNotConfiguredError("League-team-season service is not configured")
        return linker

    def import_teams(self, raw_query: Mapping[str, Any]) -> TeamImportSummary:
        params = parse_team_import_params(raw_query)
        page = self.source.fetch_teams_page(league=params.league, season=params.season)
        echo = {"season": params.season, "league": params.league, "total_pages": page.total_pages}

        if not page.items:
            logger.info("No teams returned for %s", params)
            return TeamImportSummary(imported=0, message=NO_TEAMS_FOUND, **echo)

        teams: list[TeamPayload] = []
        kept_items: list[tuple[int, dict[str, Any]]] = []
        for item in page.items:
            team = normalize_team_item(item)
            if team is None:
                continue
            teams.append(team)
            kept_items.append((team.id, item))

        if not teams:
            return TeamImportSummary(imported=0, message=NO_VALID_TEAMS, **echo)

        try:
            imported = self.team_repo.bulk_upsert(teams)
            if self.store_ingested_payloads:
                archive_payloads(self.session, IngestedEntityEnum.TEAM, kept_items)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise EntityUpsertError(f"Bulk team upsert failed: {e}") from e

        links = [
            LeagueTeamSeasonPayload(league_id=params.league, team_id=team_id, season=params.season)
            for team_id in dict.fromkeys(t.id for t in teams)
        ]
        result = reconcile_team_links(links, self._linker_or_raise())

        logger.info(
            "Imported teams league=%s season=%s: imported=%d links=%d link_errors=%d",
            params.league,
            params.season,
            imported,
            result.inserted,
            len(result.errors),
        )

        return TeamImportSummary(
            imported=imported,
            mappings_inserted=result.inserted,
            mapping_errors=result.errors,
            **echo,
        )
