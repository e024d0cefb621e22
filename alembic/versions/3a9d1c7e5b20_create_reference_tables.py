"""Create reference tables for players, leagues, teams and mappings

Revision ID: 3a9d1c7e5b20
Revises:
Create Date: 2026-10-18

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3a9d1c7e5b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "leagues",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=True),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("logo", sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "teams",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("code", sa.String(length=16), nullable=True),
        sa.Column("country", sa.String(length=255), nullable=True),
        sa.Column("founded", sa.Integer(), nullable=True),
        sa.Column("logo", sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_teams_name", "teams", ["name"], unique=False)

    op.create_table(
        "players",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("firstname", sa.String(length=255), nullable=True),
        sa.Column("lastname", sa.String(length=255), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("birth_place", sa.String(length=255), nullable=True),
        sa.Column("birth_country", sa.String(length=255), nullable=True),
        sa.Column("nationality", sa.String(length=255), nullable=True),
        sa.Column("height", sa.String(length=20), nullable=True),
        sa.Column("weight", sa.String(length=20), nullable=True),
        sa.Column("number", sa.Integer(), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("photo", sa.String(length=1024), nullable=True),
        sa.Column("is_popular", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_players_name", "players", ["name"], unique=False)
    op.create_index("ix_players_is_popular", "players", ["is_popular"], unique=False)

    op.create_table(
        "players_teams_league_season",
        sa.Column("player_id", sa.Integer(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("season", sa.Integer(), autoincrement=False, nullable=False),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("player_id", "league_id", "team_id", "season"),
    )
    op.create_index(
        "ix_ptls_league_team_season",
        "players_teams_league_season",
        ["league_id", "team_id", "season"],
        unique=False,
    )

    op.create_table(
        "ingested_payloads",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(), nullable=False),
        sa.Column("entity_key", sa.String(), nullable=False),
        sa.Column("fetched_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "payload_json",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_ingested_payloads_lookup",
        "ingested_payloads",
        ["provider", "entity_type", "entity_key", "fetched_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_ingested_payloads_lookup", table_name="ingested_payloads")
    op.drop_table("ingested_payloads")
    op.drop_index("ix_ptls_league_team_season", table_name="players_teams_league_season")
    op.drop_table("players_teams_league_season")
    op.drop_index("ix_players_is_popular", table_name="players")
    op.drop_index("ix_players_name", table_name="players")
    op.drop_table("players")
    op.drop_index("ix_teams_name", table_name="teams")
    op.drop_table("teams")
    op.drop_table("leagues")
