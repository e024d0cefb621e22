from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pitchside.db.base import Base, TimestampMixin


class League(Base, TimestampMixin):
    __tablename__ = "leagues"

    # API-Football league id; not autoincremented.
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    player_mappings: Mapped[list[PlayerTeamLeagueSeason]] = relationship(
        back_populates="league", cascade="all, delete-orphan"
    )


from pitchside.db.models.core.player_team_league_season import (  # noqa: E402
    PlayerTeamLeagueSeason,
)
