# netcrate/history/core/logging.py
from __future__ import annotations

import logging
import sys
from typing import TextIO

from pythonjsonlogger import jsonlogger

HISTORY_LOGGER = "netcrate.history"

_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(
    level: str = "INFO",
    *,
    json_output: bool = True,
    stream: TextIO | None = None,
) -> logging.Handler:
    """
    Install a single root handler for a host application.

    Scan and delete warnings from the history store go through the
    ``netcrate.history`` logger hierarchy, so a host can also tune them
    separately via ``logging.getLogger(HISTORY_LOGGER)``.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream or sys.stdout)
    if json_output:
        handler.setFormatter(jsonlogger.JsonFormatter(_FIELDS))
    else:
        handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))

    # Replace rather than append so repeated setup stays idempotent
    root.handlers = [handler]
    return handler
