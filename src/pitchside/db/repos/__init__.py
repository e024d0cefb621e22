from __future__ import annotations

from pitchside.db.repos.core.league_repo import LeagueRepository
from pitchside.db.repos.core.league_team_season_repo import LeagueTeamSeasonRepository
from pitchside.db.repos.core.player_repo import PlayerRepository
from pitchside.db.repos.core.player_team_league_season_repo import (
    PlayerTeamLeagueSeasonRepository,
)
from pitchside.db.repos.core.team_repo import TeamRepository

__all__ = [
    "LeagueRepository",
    "LeagueTeamSeasonRepository",
    "PlayerRepository",
    "PlayerTeamLeagueSeasonRepository",
    "TeamRepository",
]
