"""
Logging setup and structured event helper shared by the API, scheduler and CLI.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level_name: str | None = None) -> None:
    """
    Configure root logging once for the process.

    Falls back to ``LOG_LEVEL`` and then INFO; unknown level names mean INFO.
    """

    raw_level = level_name if level_name is not None else os.getenv("LOG_LEVEL", "INFO")
    level = raw_level.strip().upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one pipeline milestone as a compact JSON line.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
