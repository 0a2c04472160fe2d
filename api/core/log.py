"""
Process-wide logging setup (stdlib `logging`).

Modules log through `logging.getLogger(__name__)` with `event key=value`
messages; this only wires the root handler and level.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str | None = None) -> None:
    level_name = (level or config.log_level()).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
