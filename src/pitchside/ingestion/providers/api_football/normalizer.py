from __future__ import annotations

from typing import Any

from pitchside.core.text import clean_str, parse_int, parse_iso_date, parse_positive_int
from pitchside.ingestion.payloads import (
    LeaguePayload,
    MappingPayload,
    NormalizedPlayer,
    PlayerPayload,
    TeamPayload,
)

ApiItem = dict[str, Any]


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _strict_id(value: Any) -> int | None:
    # Identity must be a real positive int; "123" or True do not qualify.
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def _first_statistics(item: ApiItem) -> dict[str, Any]:
    stats = item.get("statistics")
    if isinstance(stats, list) and stats:
        return _as_dict(stats[0])
    return {}


def normalize_player_item(
    item: ApiItem,
    *,
    league_id: int,
    team_id: int | None,
    season: int,
) -> NormalizedPlayer | None:
    """Map one API-Football `/players` record onto a player row and its mapping.

    Returns None when the record has no usable player id. When no team can be
    resolved (explicit `team_id`, else the first statistics block) the player is
    still returned with `mapping=None`.
    """

    player = _as_dict(item.get("player"))
    player_id = _strict_id(player.get("id"))
    if player_id is None:
        return None

    stats = _first_statistics(item)
    games = _as_dict(stats.get("games"))
    birth = _as_dict(player.get("birth"))

    number = player.get("number")
    if number is None:
        number = games.get("number")

    position = clean_str(player.get("position"))
    if position is None:
        position = clean_str(games.get("position"))

    payload = PlayerPayload(
        id=player_id,
        name=clean_str(player.get("name")),
        firstname=clean_str(player.get("firstname")),
        lastname=clean_str(player.get("lastname")),
        age=parse_int(player.get("age")),
        birth_date=parse_iso_date(birth.get("date")),
        birth_place=clean_str(birth.get("place")),
        birth_country=clean_str(birth.get("country")),
        nationality=clean_str(player.get("nationality")),
        height=clean_str(player.get("height")),
        weight=clean_str(player.get("weight")),
        number=parse_int(number),
        position=position,
        photo=clean_str(player.get("photo")),
    )

    resolved_team_id = team_id
    if resolved_team_id is None:
        resolved_team_id = parse_int(_as_dict(stats.get("team")).get("id"))

    mapping: MappingPayload | None = None
    if resolved_team_id is not None and resolved_team_id > 0:
        mapping = MappingPayload(
            player_id=player_id,
            league_id=league_id,
            team_id=resolved_team_id,
            season=season,
        )

    return NormalizedPlayer(player=payload, mapping=mapping)


def normalize_team_item(item: ApiItem) -> TeamPayload | None:
    """Map one `/teams` record onto a team row; None without an id or a name."""

    team = _as_dict(item.get("team"))
    # Team ids are parsed leniently, unlike player identity.
    team_id = parse_positive_int(team.get("id"))
    name = clean_str(team.get("name"))
    if team_id is None or name is None:
        return None

    return TeamPayload(
        id=team_id,
        name=name,
        code=clean_str(team.get("code")),
        country=clean_str(team.get("country")),
        founded=parse_int(team.get("founded")),
        national=team.get("national") is True,
        logo=clean_str(team.get("logo")),
    )


def normalize_league_item(item: ApiItem) -> LeaguePayload | None:
    league = _as_dict(item.get("league"))
    league_id = parse_positive_int(league.get("id"))
    name = clean_str(league.get("name"))
    if league_id is None or name is None:
        return None

    return LeaguePayload(
        id=league_id,
        name=name,
        type=clean_str(league.get("type")),
        country=clean_str(_as_dict(item.get("country")).get("name")),
        logo=clean_str(league.get("logo")),
    )
