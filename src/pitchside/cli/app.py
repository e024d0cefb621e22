from __future__ import annotations

import typer

from pitchside.cli.db import app as db_app
from pitchside.cli.ingest import app as ingest_app
from pitchside.core.config import settings
from pitchside.core.logging import configure_logging

app = typer.Typer(no_args_is_help=True)
app.add_typer(ingest_app, name="ingest")
app.add_typer(db_app, name="db")


@app.callback()
def main(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."
    ),
) -> None:
    configure_logging(log_level)
