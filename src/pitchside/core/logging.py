from __future__ import annotations

import logging


def configure_logging(level: str | int = logging.INFO, *, force: bool = False) -> None:
    """Initialise the root logger with a terse format suitable for CLI runs.

    ``level`` accepts either a logging constant or a level name such as ``"DEBUG"``.
    """

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
