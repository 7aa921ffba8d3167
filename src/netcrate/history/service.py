# netcrate/history/service.py
"""
Result history facade used by the runner and CLI layers.

HistoryService owns one FileResultStore and serializes every call behind a
single re-entrant lock, so a multi-threaded host can share one instance.
It does not coordinate with other processes.
"""
from __future__ import annotations

import logging
import threading
from datetime import timedelta

from netcrate.history.contracts.criteria import FilterCriteria
from netcrate.history.contracts.index import HistoryIndex
from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.contracts.stats import HistoryStats
from netcrate.history.contracts.store import ResultHistory
from netcrate.history.core.config import Settings, settings as default_settings
from netcrate.history.core.maintenance import cleanup_older_than, compute_stats
from netcrate.history.core.query import QueryEngine
from netcrate.history.core.store.layout import HistoryLayout
from netcrate.history.core.store.scan import ScanReport
from netcrate.history.core.store.store import FileResultStore

logger = logging.getLogger(__name__)


class HistoryService(ResultHistory):
    """
    Example:
        history = HistoryService.from_settings()
        history.save(result)
        recent = history.list(FilterCriteria(status="failed", limit=5))
    """

    def __init__(self, store: FileResultStore, query: QueryEngine | None = None) -> None:
        self._store = store
        self._query = query or QueryEngine()
        self._lock = threading.RLock()
        self.last_scan: ScanReport | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HistoryService":
        """
        Resolve the history directory and load it.

        Raises:
            ConfigurationError: If the directory cannot be resolved or created
        """
        layout = HistoryLayout.from_settings(settings or default_settings)
        return cls.open(layout)

    @classmethod
    def open(cls, layout: HistoryLayout) -> "HistoryService":
        store = FileResultStore(layout)
        service = cls(store)
        service.last_scan = store.initialize()
        return service

    @property
    def layout(self) -> HistoryLayout:
        return self._store.layout

    def save(self, result: ExecutionResult) -> None:
        with self._lock:
            self._store.save(result)

    def load(self) -> None:
        with self._lock:
            self.last_scan = self._store.load()

    def list(self, criteria: FilterCriteria | None = None) -> list[ExecutionResult]:
        with self._lock:
            return self._query.list(self._store.records(), criteria)

    def get(self, session_id: str) -> ExecutionResult | None:
        with self._lock:
            return self._store.get(session_id)

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._store.delete(session_id)

    def stats(self) -> HistoryStats:
        with self._lock:
            return compute_stats(
                self._store.records(),
                history_dir=str(self.layout.root),
                index_path=str(self.layout.index_path),
            )

    def cleanup_older_than(self, max_age: timedelta) -> int:
        with self._lock:
            return cleanup_older_than(self._store, max_age)

    def rebuild_index(self) -> HistoryIndex:
        with self._lock:
            return self._store.rebuild_index()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
