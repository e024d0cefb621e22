from __future__ import annotations

from sqlalchemy import ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pitchside.db.base import Base


class PlayerTeamLeagueSeason(Base):
    """A player appeared for a team in a league during a season."""

    __tablename__ = "players_teams_league_season"

    player_id: Mapped[int] = mapped_column(
        ForeignKey("players.id", ondelete="CASCADE"), primary_key=True
    )
    league_id: Mapped[int] = mapped_column(
        ForeignKey("leagues.id", ondelete="CASCADE"), primary_key=True
    )
    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"), primary_key=True
    )
    season: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    player: Mapped[Player] = relationship(back_populates="team_mappings")
    league: Mapped[League] = relationship(back_populates="player_mappings")
    team: Mapped[Team] = relationship(back_populates="player_mappings")

    __table_args__ = (
        Index("ix_ptls_league_team_season", "league_id", "team_id", "season"),
    )


from pitchside.db.models.core.league import League  # noqa: E402
from pitchside.db.models.core.player import Player  # noqa: E402
from pitchside.db.models.core.team import Team  # noqa: E402
