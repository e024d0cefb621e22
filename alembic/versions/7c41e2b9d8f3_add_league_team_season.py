"""Add leagues_teams_season and teams.national

Revision ID: 7c41e2b9d8f3
Revises: 3a9d1c7e5b20
Create Date: 2026-10-18

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "7c41e2b9d8f3"
down_revision: Union[str, Sequence[str], None] = "3a9d1c7e5b20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("teams") as batch_op:
        batch_op.add_column(
            sa.Column("national", sa.Boolean(), server_default=sa.false(), nullable=False)
        )

    op.create_table(
        "leagues_teams_season",
        sa.Column("league_id", sa.Integer(), nullable=False),
        sa.Column("team_id", sa.Integer(), nullable=False),
        sa.Column("season", sa.Integer(), autoincrement=False, nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["team_id"], ["teams.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("league_id", "team_id", "season"),
    )
    op.create_index(
        "ix_lts_team_season", "leagues_teams_season", ["team_id", "season"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_lts_team_season", table_name="leagues_teams_season")
    op.drop_table("leagues_teams_season")
    with op.batch_alter_table("teams") as batch_op:
        batch_op.drop_column("national")
