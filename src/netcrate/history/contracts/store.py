# netcrate/history/contracts/store.py
"""
Collaborator-facing protocol for the result history.

The runner and CLI layers depend on this protocol rather than on the
file-backed implementation.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Protocol, runtime_checkable

from netcrate.history.contracts.criteria import FilterCriteria
from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.contracts.stats import HistoryStats


@runtime_checkable
class ResultHistory(Protocol):
    def save(self, result: ExecutionResult) -> None:
        """
        Persist a result and refresh the index.

        Raises:
            HistoryIOError: If the record file cannot be written
            IndexWriteError: If the record was written but the index was not
        """
        ...

    def load(self) -> None:
        """Discard in-memory state and rescan the history directory."""
        ...

    def list(self, criteria: FilterCriteria | None = None) -> list[ExecutionResult]: ...

    def get(self, session_id: str) -> ExecutionResult | None: ...

    def delete(self, session_id: str) -> None:
        """
        Remove a result and its log file.

        Raises:
            NotFoundError: If the session id is unknown
        """
        ...

    def stats(self) -> HistoryStats: ...

    def cleanup_older_than(self, max_age: timedelta) -> int: ...
