from pitchside.db.models.core.league import League
from pitchside.db.models.core.league_team_season import LeagueTeamSeason
from pitchside.db.models.core.player import Player
from pitchside.db.models.core.player_team_league_season import PlayerTeamLeagueSeason
from pitchside.db.models.core.team import Team
from pitchside.db.models.ingestion.ingested_payload import IngestedPayload

__all__ = [
    "IngestedPayload",
    "League",
    "LeagueTeamSeason",
    "Player",
    "PlayerTeamLeagueSeason",
    "Team",
]
