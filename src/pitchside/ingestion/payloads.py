from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date
from typing import Any


@dataclass(frozen=True)
class PlayerPayload:
    """Canonical player row as written by the import. ``id`` is the provider id."""

    id: int
    name: str | None = None
    firstname: str | None = None
    lastname: str | None = None
    age: int | None = None
    birth_date: date | None = None
    birth_place: str | None = None
    birth_country: str | None = None
    nationality: str | None = None
    height: str | None = None
    weight: str | None = None
    number: int | None = None
    position: str | None = None
    photo: str | None = None

    def as_row(self) -> dict[str, Any]:
        return asdict(self)


PLAYER_IDENTITY_COLUMN = "id"

# Columns rewritten on identifier conflict. The identity column is excluded here
# and nowhere else, so an upsert cannot touch it.
PLAYER_UPDATABLE_COLUMNS: tuple[str, ...] = tuple(
    f.name for f in fields(PlayerPayload) if f.name != PLAYER_IDENTITY_COLUMN
)


@dataclass(frozen=True)
class MappingPayload:
    """Player/league/team/season fact. Always fully populated."""

    player_id: int
    league_id: int
    team_id: int
    season: int

    def as_row(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class NormalizedPlayer:
    player: PlayerPayload
    mapping: MappingPayload | None


@dataclass(frozen=True)
class TeamPayload:
    """Team row as written by the team import. ``name`` is always present."""

    id: int
    name: str
    code: str | None = None
    country: str | None = None
    founded: int | None = None
    national: bool = False
    logo: str | None = None

    def as_row(self) -> dict[str, Any]:
        return asdict(self)


TEAM_UPDATABLE_COLUMNS: tuple[str, ...] = tuple(
    f.name for f in fields(TeamPayload) if f.name != "id"
)


@dataclass(frozen=True)
class LeaguePayload:
    id: int
    name: str
    type: str | None = None
    country: str | None = None
    logo: str | None = None

    def as_row(self) -> dict[str, Any]:
        return asdict(self)


LEAGUE_UPDATABLE_COLUMNS: tuple[str, ...] = tuple(
    f.name for f in fields(LeaguePayload) if f.name != "id"
)


@dataclass(frozen=True)
class LeagueTeamSeasonPayload:
    """A team took part in a league during a season."""

    league_id: int
    team_id: int
    season: int

    def as_row(self) -> dict[str, int]:
        return asdict(self)
