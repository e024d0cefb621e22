from __future__ import annotations

from datetime import date

from pitchside.ingestion.payloads import LeaguePayload, MappingPayload, TeamPayload
from pitchside.ingestion.providers.api_football.normalizer import (
    normalize_league_item,
    normalize_player_item,
    normalize_team_item,
)


def _item(player: dict | None = None, statistics: list | None = None) -> dict:
    item: dict = {"player": player if player is not None else {}}
    if statistics is not None:
        item["statistics"] = statistics
    return item


def test_normalize_maps_and_cleans_fields() -> None:
    item = _item(
        {
            "id": 276,
            "name": "  Neymar ",
            "firstname": "Neymar",
            "lastname": "da Silva Santos Júnior",
            "age": "31",
            "birth": {"date": "1992-02-05", "place": "Mogi das Cruzes", "country": ""},
            "nationality": "Brazil",
            "height": "175 cm",
            "weight": " ",
            "photo": "https://media.api-sports.io/football/players/276.png",
        },
        [{"team": {"id": 85}, "games": {"number": "10", "position": "Attacker"}}],
    )

    result = normalize_player_item(item, league_id=61, team_id=85, season=2021)

    assert result is not None
    p = result.player
    assert p.id == 276
    assert p.name == "Neymar"
    assert p.age == 31
    assert p.birth_date == date(1992, 2, 5)
    assert p.birth_country is None
    assert p.weight is None
    assert p.number == 10
    assert p.position == "Attacker"
    assert result.mapping == MappingPayload(player_id=276, league_id=61, team_id=85, season=2021)


def test_normalize_lenient_numbers_default_to_none() -> None:
    item = _item({"id": 5, "name": "X", "age": "unknown", "number": "", "birth": None})

    result = normalize_player_item(item, league_id=39, team_id=33, season=2021)

    assert result is not None
    assert result.player.age is None
    assert result.player.number is None
    assert result.player.birth_date is None


def test_normalize_skips_records_without_usable_identity() -> None:
    for player in ({}, {"id": None}, {"id": "100"}, {"id": 0}, {"id": -3}, {"id": True}):
        assert normalize_player_item(
            _item(player, [{"team": {"id": 33}}]), league_id=39, team_id=33, season=2021
        ) is None

    assert normalize_player_item({"statistics": []}, league_id=39, team_id=33, season=2021) is None
    assert normalize_player_item({"player": "oops"}, league_id=39, team_id=33, season=2021) is None


def test_explicit_team_wins_over_statistics() -> None:
    item = _item({"id": 7, "name": "A"}, [{"team": {"id": 50}}])

    result = normalize_player_item(item, league_id=39, team_id=33, season=2022)

    assert result is not None
    assert result.mapping is not None
    assert result.mapping.team_id == 33


def test_team_inferred_from_first_statistics_block() -> None:
    item = _item({"id": 7, "name": "A"}, [{"team": {"id": "50"}}, {"team": {"id": 60}}])

    result = normalize_player_item(item, league_id=39, team_id=None, season=2022)

    assert result is not None
    assert result.mapping == MappingPayload(player_id=7, league_id=39, team_id=50, season=2022)


def test_missing_team_keeps_player_and_drops_mapping() -> None:
    for stats in (None, [], [{"team": None}], [{"team": {"id": None}}], ["junk"]):
        result = normalize_player_item(
            _item({"id": 8, "name": "B"}, stats), league_id=39, team_id=None, season=2022
        )
        assert result is not None
        assert result.player.id == 8
        assert result.mapping is None


def test_player_fields_take_precedence_over_statistics_games() -> None:
    item = _item(
        {"id": 9, "name": "C", "number": 4, "position": "Defender"},
        [{"games": {"number": 44, "position": "Midfielder"}}],
    )

    result = normalize_player_item(item, league_id=39, team_id=33, season=2022)

    assert result is not None
    assert result.player.number == 4
    assert result.player.position == "Defender"


def test_normalize_team_item_maps_fields() -> None:
    item = {
        "team": {
            "id": "33",
            "name": " Manchester United ",
            "code": "MUN",
            "country": "England",
            "founded": 1878,
            "national": False,
            "logo": "https://media.api-sports.io/football/teams/33.png",
        },
        "venue": {"id": 556, "name": "Old Trafford"},
    }

    assert normalize_team_item(item) == TeamPayload(
        id=33,
        name="Manchester United",
        code="MUN",
        country="England",
        founded=1878,
        national=False,
        logo="https://media.api-sports.io/football/teams/33.png",
    )


def test_normalize_team_item_requires_id_and_name() -> None:
    assert normalize_team_item({"team": {"id": 33, "name": "  "}}) is None
    assert normalize_team_item({"team": {"id": 0, "name": "X"}}) is None
    assert normalize_team_item({"venue": {}}) is None
    assert normalize_team_item({"team": {"id": 1, "name": "X", "national": "yes"}}) == (
        TeamPayload(id=1, name="X")
    )


def test_normalize_league_item_reads_country_block() -> None:
    item = {
        "league": {"id": 39, "name": "Premier League", "type": "League", "logo": None},
        "country": {"name": "England", "code": "GB"},
        "seasons": [{"year": 2021}],
    }

    assert normalize_league_item(item) == LeaguePayload(
        id=39, name="Premier League", type="League", country="England"
    )
    assert normalize_league_item({"league": {"id": 39}}) is None
