from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, Index, String, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pitchside.db.base import Base, TimestampMixin


class Player(Base, TimestampMixin):
    __tablename__ = "players"

    # API-Football player id, stable across pages and re-imports.
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    firstname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lastname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    age: Mapped[int | None] = mapped_column(nullable=True)
    birth_date: Mapped[date | None] = mapped_column(nullable=True)
    birth_place: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birth_country: Mapped[str | None] = mapped_column(String(255), nullable=True)
    nationality: Mapped[str | None] = mapped_column(String(255), nullable=True)
    height: Mapped[str | None] = mapped_column(String(20), nullable=True)
    weight: Mapped[str | None] = mapped_column(String(20), nullable=True)
    number: Mapped[int | None] = mapped_column(nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    photo: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Curated locally; imports never write it.
    is_popular: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    team_mappings: Mapped[list[PlayerTeamLeagueSeason]] = relationship(
        back_populates="player", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("ix_players_name", "name"),
        Index("ix_players_is_popular", "is_popular"),
    )


from pitchside.db.models.core.player_team_league_season import (  # noqa: E402
    PlayerTeamLeagueSeason,
)
