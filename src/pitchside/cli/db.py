from __future__ import annotations

import typer

import pitchside.db.models  # noqa: F401
from pitchside.cli.common import make_engine
from pitchside.db.base import Base

app = typer.Typer(help="Local database utilities.")


@app.command("create-tables")
def create_tables_cmd() -> None:
    """Create all tables directly from the models (development only; prefer alembic)."""

    engine = make_engine()
    Base.metadata.create_all(engine)
    typer.echo(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
