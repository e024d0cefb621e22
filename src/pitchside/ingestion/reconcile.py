from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TypeVar

from pitchside.ingestion.payloads import LeagueTeamSeasonPayload, MappingPayload
from pitchside.services.league_team_season import LeagueTeamSeasonLinker
from pitchside.services.player_team_league_season import MappingService

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class MappingError:
    player_id: int
    reason: str


@dataclass(frozen=True)
class TeamLinkError:
    team_id: int
    reason: str


@dataclass(frozen=True)
class ReconcileResult:
    inserted: int = 0
    errors: list[MappingError] = field(default_factory=list)


@dataclass(frozen=True)
class TeamLinkResult:
    inserted: int = 0
    errors: list[TeamLinkError] = field(default_factory=list)


def _format_reason(exc: BaseException) -> str:
    return str(exc).strip() or exc.__class__.__name__


def _write_each(
    items: Sequence[T], write: Callable[[T], object]
) -> tuple[int, list[tuple[T, str]]]:
    inserted = 0
    failures: list[tuple[T, str]] = []
    for item in items:
        try:
            write(item)
        except Exception as e:
            logger.warning("Relationship write failed for %s: %s", item, e)
            failures.append((item, _format_reason(e)))
            continue
        inserted += 1
    return inserted, failures


def reconcile_mappings(
    payloads: Sequence[MappingPayload],
    service: MappingService,
) -> ReconcileResult:
    """Create each mapping independently, in order.

    A failing record is recorded against its player id and the loop moves on;
    this function never raises for a per-record failure.
    """

    inserted, failures = _write_each(payloads, service.create_mapping_record)
    return ReconcileResult(
        inserted=inserted,
        errors=[MappingError(player_id=p.player_id, reason=r) for p, r in failures],
    )


def reconcile_team_links(
    payloads: Sequence[LeagueTeamSeasonPayload],
    linker: LeagueTeamSeasonLinker,
) -> TeamLinkResult:
    inserted, failures = _write_each(payloads, linker.link_team)
    return TeamLinkResult(
        inserted=inserted,
        errors=[TeamLinkError(team_id=p.team_id, reason=r) for p, r in failures],
    )
