from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pitchside.core.config import settings
from pitchside.db.enums import IngestedEntityEnum
from pitchside.db.repos.core.player_repo import PlayerRepository
from pitchside.ingestion.archive import archive_payloads
from pitchside.ingestion.errors import (
    EntityUpsertError,
    ImportParameterError,
    ServiceNotConfiguredError,
)
from pitchside.ingestion.params import query_positive_int
from pitchside.ingestion.payloads import MappingPayload, PlayerPayload
from pitchside.ingestion.providers.api_football.normalizer import normalize_player_item
from pitchside.ingestion.providers.base.adapter import PlayersPageSource
from pitchside.ingestion.providers.base.types import ResponsePage
from pitchside.ingestion.reconcile import MappingError, reconcile_mappings
from pitchside.services.player_team_league_season import MappingService

logger = logging.getLogger(__name__)

ApiItem = dict[str, Any]
MappingServiceResolver = Callable[[], MappingService | None]

NO_PLAYERS_FOUND = "No players found"
NO_VALID_PLAYERS = "No valid players to save"


@dataclass(frozen=True)
class PlayerImportParams:
    season: int
    league: int
    team: int
    page: int = 1


def parse_import_params(raw_query: Mapping[str, Any]) -> PlayerImportParams:
    """Validate loosely typed query values; the first bad field raises."""

    return PlayerImportParams(
        season=query_positive_int(raw_query, "season"),
        league=query_positive_int(raw_query, "league"),
        team=query_positive_int(raw_query, "team"),
        page=query_positive_int(raw_query, "page", default=1),
    )


@dataclass(frozen=True)
class PlayerImportSummary:
    imported: int
    mappings_inserted: int = 0
    mapping_errors: list[MappingError] = field(default_factory=list)
    page: int | None = None
    total_pages: int | None = None
    season: int | None = None
    league: int | None = None
    team: int | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if data["message"] is None:
            del data["message"]
        return data


@dataclass(frozen=True)
class PlayerImportRunSummary:
    """Aggregate of consecutive page imports."""

    pages: list[PlayerImportSummary]
    total_pages: int | None

    @property
    def pages_imported(self) -> int:
        return len(self.pages)

    @property
    def imported(self) -> int:
        return sum(p.imported for p in self.pages)

    @property
    def mappings_inserted(self) -> int:
        return sum(p.mappings_inserted for p in self.pages)

    @property
    def mapping_errors(self) -> list[MappingError]:
        return [e for p in self.pages for e in p.mapping_errors]


class PlayerImporter:
    """Imports API-Football player pages into the local store.

    Per page: validate -> fetch -> normalize -> bulk upsert players -> create
    mappings one by one -> summarize. The upsert and every mapping write commit
    separately, so mapping failures never undo imported players.

    The mapping service may be given directly or through a zero-argument
    resolver that is only consulted once mappings are about to be written.
    """

    def __init__(
        self,
        session: Session,
        *,
        source: PlayersPageSource,
        mapping_service: MappingService | None = None,
        resolve_mapping_service: MappingServiceResolver | None = None,
        store_ingested_payloads: bool | None = None,
    ) -> None:
        self.session = session
        self.source = source
        self.player_repo = PlayerRepository(session)
        self._mapping_service = mapping_service
        self._resolve_mapping_service = resolve_mapping_service
        if store_ingested_payloads is None:
            store_ingested_payloads = settings.store_ingested_payloads
        self.store_ingested_payloads = store_ingested_payloads

    def _mapping_service_or_raise(self) -> MappingService:
        service = self._mapping_service
        if service is None and self._resolve_mapping_service is not None:
            service = self._resolve_mapping_service()
        if service is None:
            raise ServiceNotConfiguredError(
                "Player-team-league-season service is not configured"
            )
        return service

    def import_page(self, raw_query: Mapping[str, Any]) -> PlayerImportSummary:
        params = parse_import_params(raw_query)
        return self._import_params(params)

    def import_all_pages(
        self,
        raw_query: Mapping[str, Any],
        *,
        max_pages: int | None = None,
    ) -> PlayerImportRunSummary:
        """Import from the requested page through the provider's last page.

        Stops early on an empty page or after `max_pages` pages. A hard failure
        propagates; pages imported before it stay committed.
        """

        params = parse_import_params(raw_query)
        if max_pages is not None and max_pages < 1:
            raise ImportParameterError("max_pages", "max_pages must be a positive integer")

        summaries: list[PlayerImportSummary] = []
        total_pages: int | None = None
        page = params.page

        while True:
            summary = self._import_params(
                PlayerImportParams(
                    season=params.season, league=params.league, team=params.team, page=page
                )
            )
            summaries.append(summary)
            total_pages = summary.total_pages

            if summary.message == NO_PLAYERS_FOUND:
                break
            if total_pages is None or page >= total_pages:
                break
            if max_pages is not None and len(summaries) >= max_pages:
                break
            page += 1

        return PlayerImportRunSummary(pages=summaries, total_pages=total_pages)

    def _import_params(self, params: PlayerImportParams) -> PlayerImportSummary:
        page = self.source.fetch_players_page(
            season=params.season, league=params.league, team=params.team, page=params.page
        )

        echo = {
            "page": params.page,
            "total_pages": page.total_pages,
            "season": params.season,
            "league": params.league,
            "team": params.team,
        }

        if not page.items:
            logger.info("No players returned for %s", params)
            return PlayerImportSummary(imported=0, message=NO_PLAYERS_FOUND, **echo)

        players, mappings, kept_items = self._normalize(page, params)
        if not players:
            logger.info("No usable players among %d items for %s", len(page.items), params)
            return PlayerImportSummary(imported=0, message=NO_VALID_PLAYERS, **echo)

        try:
            imported = self.player_repo.bulk_upsert(players)
            if self.store_ingested_payloads:
                archive_payloads(self.session, IngestedEntityEnum.PLAYER, kept_items)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise EntityUpsertError(f"Bulk player upsert failed: {e}") from e

        if mappings:
            result = reconcile_mappings(mappings, self._mapping_service_or_raise())
            mappings_inserted, mapping_errors = result.inserted, result.errors
        else:
            mappings_inserted, mapping_errors = 0, []

        logger.info(
            "Imported players page=%s season=%s league=%s team=%s: "
            "imported=%d mappings_inserted=%d mapping_errors=%d",
            params.page,
            params.season,
            params.league,
            params.team,
            imported,
            mappings_inserted,
            len(mapping_errors),
        )

        return PlayerImportSummary(
            imported=imported,
            mappings_inserted=mappings_inserted,
            mapping_errors=mapping_errors,
            **echo,
        )

    def _normalize(
        self, page: ResponsePage, params: PlayerImportParams
    ) -> tuple[list[PlayerPayload], list[MappingPayload], list[tuple[int, ApiItem]]]:
        players: list[PlayerPayload] = []
        mappings: list[MappingPayload] = []
        kept_items: list[tuple[int, ApiItem]] = []

        for item in page.items:
            normalized = normalize_player_item(
                item, league_id=params.league, team_id=params.team, season=params.season
            )
            # Nameless stubs are dropped along with id-less ones.
            if normalized is None or normalized.player.name is None:
                continue
            players.append(normalized.player)
            kept_items.append((normalized.player.id, item))
            if normalized.mapping is not None:
                mappings.append(normalized.mapping)

        return players, mappings, kept_items
