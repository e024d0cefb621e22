from __future__ import annotations

from sqlalchemy import Index, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pitchside.db.base import Base, TimestampMixin


class Team(Base, TimestampMixin):
    __tablename__ = "teams"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    founded: Mapped[int | None] = mapped_column(nullable=True)
    national: Mapped[bool] = mapped_column(nullable=False, server_default=false(), default=False)
    logo: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    player_mappings: Mapped[list[PlayerTeamLeagueSeason]] = relationship(
        back_populates="team", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_teams_name", "name"),)


from pitchside.db.models.core.player_team_league_season import (  # noqa: E402
    PlayerTeamLeagueSeason,
)
