# netcrate/history/core/exceptions.py
"""Error taxonomy for the result history store."""
from __future__ import annotations

from pathlib import Path


class HistoryError(Exception):
    pass


class ConfigurationError(HistoryError):
    """The history directory cannot be resolved or created."""


class HistoryIOError(HistoryError):
    """A read, write or remove failed on a record or index file."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class IndexWriteError(HistoryIOError):
    """The index could not be rewritten; record files are still valid."""


class NotFoundError(HistoryError):
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Result not found: {session_id}")


class ParseError(HistoryError):
    """A record file's contents cannot be decoded."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot parse result file {path}: {reason}")
