from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pitchside.core.config import settings
from pitchside.db.enums import IngestedEntityEnum
from pitchside.db.repos.core.league_repo import LeagueRepository
from pitchside.ingestion.archive import archive_payloads
from pitchside.ingestion.errors import EntityUpsertError, ImportParameterError
from pitchside.ingestion.params import query_positive_int, query_str
from pitchside.ingestion.payloads import LeaguePayload
from pitchside.ingestion.providers.api_football.normalizer import normalize_league_item
from pitchside.ingestion.providers.base.adapter import LeaguesSource

logger = logging.getLogger(__name__)

NO_LEAGUES_FOUND = "No leagues found"
NO_VALID_LEAGUES = "No valid leagues to save"


@dataclass(frozen=True)
class LeagueImportParams:
    league: int | None = None
    season: int | None = None
    country: str | None = None


def parse_league_import_params(raw_query: Mapping[str, Any]) -> LeagueImportParams:
    params = LeagueImportParams(
        league=query_positive_int(raw_query, "league", default=None),
        season=query_positive_int(raw_query, "season", default=None),
        country=query_str(raw_query, "country"),
    )
    # An unfiltered `/leagues` call returns every competition the provider knows.
    if params.league is None and params.country is None:
        raise ImportParameterError("league", "league or country is required")
    return params


@dataclass(frozen=True)
class LeagueImportSummary:
    imported: int
    league: int | None = None
    season: int | None = None
    country: str | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["message"] is None:
            del data["message"]
        return data


class LeagueImporter:
    """Upserts API-Football leagues so teams and players can reference them."""

    def __init__(
        self,
        session: Session,
        *,
        source: LeaguesSource,
        store_ingested_payloads: bool | None = None,
    ) -> None:
        self.session = session
        self.source = source
        self.league_repo = LeagueRepository(session)
        if store_ingested_payloads is None:
            store_ingested_payloads = settings.store_ingested_payloads
        self.store_ingested_payloads = store_ingested_payloads

    def import_leagues(self, raw_query: Mapping[str, Any]) -> LeagueImportSummary:
        params = parse_league_import_params(raw_query)
        page = self.source.fetch_leagues(
            league=params.league, season=params.season, country=params.country
        )
        echo = asdict(params)

        if not page.items:
            return LeagueImportSummary(imported=0, message=NO_LEAGUES_FOUND, **echo)

        leagues: list[LeaguePayload] = []
        kept_items: list[tuple[int, dict[str, Any]]] = []
        for item in page.items:
            league = normalize_league_item(item)
            if league is not None:
                leagues.append(league)
                kept_items.append((league.id, item))

        if not leagues:
            return LeagueImportSummary(imported=0, message=NO_VALID_LEAGUES, **echo)

        try:
            imported = self.league_repo.bulk_upsert(leagues)
            if self.store_ingested_payloads:
                archive_payloads(self.session, IngestedEntityEnum.LEAGUE, kept_items)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise EntityUpsertError(f"Bulk league upsert failed: {e}") from e

        logger.info("Imported %d leagues for %s", imported, params)
        return LeagueImportSummary(imported=imported, **echo)
