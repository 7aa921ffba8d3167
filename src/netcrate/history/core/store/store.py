# netcrate/history/core/store/store.py
"""File-backed result store.

Implementation notes:
- Each result is stored as JSON at: {root}/{template}-{YYYYmmdd-HHMMSS}.json
- The in-memory map (session id -> result) is rebuilt from those files by
  load() and updated incrementally by save()/delete()
- {root}/index.json is rewritten after every mutation; it is a projection of
  the in-memory map and is never read back

Two runs of the same template starting within the same second get distinct
files through a numeric suffix. There is no cross-process locking: two
processes sharing a directory can race and the last index write wins.
"""
from __future__ import annotations

import logging
from pathlib import Path

from netcrate.history.contracts.index import HistoryIndex
from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.core.exceptions import HistoryIOError, NotFoundError
from netcrate.history.core.store.codec import write_result
from netcrate.history.core.store.index import write_index
from netcrate.history.core.store.layout import HistoryLayout
from netcrate.history.core.store.scan import ScanReport, scan_directory

logger = logging.getLogger(__name__)


class FileResultStore:
    """
    Result store over a single history directory.

    Not thread-safe; HistoryService serializes access for multi-threaded hosts.

    Example:
        store = FileResultStore(HistoryLayout(root=Path("~/.netcrate/results")))
        report = store.initialize()
        store.save(result)
    """

    def __init__(self, layout: HistoryLayout) -> None:
        self._layout = layout
        self._results: dict[str, ExecutionResult] = {}
        self._shadowed: dict[str, list[Path]] = {}

    @property
    def layout(self) -> HistoryLayout:
        return self._layout

    def initialize(self) -> ScanReport:
        """
        Ensure the directory exists and load every record in it.

        Raises:
            ConfigurationError: If the directory cannot be created
        """
        self._layout.ensure()
        return self.load()

    def load(self) -> ScanReport:
        """Rebuild the in-memory map from the record files on disk."""
        report = scan_directory(self._layout)
        self._results = dict(report.records)
        self._shadowed = {sid: list(paths) for sid, paths in report.shadowed.items()}
        return report

    def save(self, result: ExecutionResult) -> Path:
        """
        Persist a result, then refresh the index.

        ``result.result_path`` is assigned on the passed object.

        Raises:
            HistoryIOError: If the record file cannot be written (nothing changed)
            IndexWriteError: If the record was saved but the index was not
        """
        previous = self._results.get(result.session_id)
        path = self._choose_path(result)

        stored = result.model_copy(deep=True)
        stored.result_path = str(path)
        write_result(stored, path)
        result.result_path = str(path)

        self._apply_saved(stored)
        if previous is not None and previous.result_path != stored.result_path:
            self._remove_file(Path(previous.result_path), strict=False)
        for stale in self._shadowed.pop(result.session_id, []):
            if stale != path:
                self._remove_file(stale, strict=False)

        logger.debug("Saved result %s to %s", result.session_id, path)
        self.rebuild_index()
        return path

    def get(self, session_id: str) -> ExecutionResult | None:
        result = self._results.get(session_id)
        if result is None:
            return None
        return result.model_copy(deep=True)

    def delete(self, session_id: str) -> None:
        """
        Remove a result's file, its log file and its index entry.

        A record file that is already gone is not an error. A log file that
        cannot be removed is only logged.

        Raises:
            NotFoundError: If the session id is unknown
            HistoryIOError: If the record file exists but cannot be removed
            IndexWriteError: If the result was removed but the index was not
        """
        result = self._results.get(session_id)
        if result is None:
            raise NotFoundError(session_id)

        self._remove_file(Path(result.result_path), strict=True)
        # Older duplicates would otherwise bring the session back on load
        for stale in self._shadowed.get(session_id, []):
            self._remove_file(stale, strict=True)
        if result.log_path:
            self._remove_file(Path(result.log_path), strict=False)

        self._apply_deleted(session_id)
        logger.debug("Deleted result %s", session_id)
        self.rebuild_index()

    def rebuild_index(self) -> HistoryIndex:
        """
        Raises:
            IndexWriteError: If the index file cannot be written
        """
        return write_index(self._layout, self._results.values())

    def records(self) -> list[ExecutionResult]:
        """Snapshot of every stored result, in no particular order."""
        return [r.model_copy(deep=True) for r in self._results.values()]

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._results

    # ------------------------------------------------------------------
    # Incremental deltas
    # ------------------------------------------------------------------

    def _apply_saved(self, result: ExecutionResult) -> None:
        self._results[result.session_id] = result

    def _apply_deleted(self, session_id: str) -> None:
        self._results.pop(session_id, None)
        self._shadowed.pop(session_id, None)

    def _choose_path(self, result: ExecutionResult) -> Path:
        previous = self._results.get(result.session_id)
        own = Path(previous.result_path) if previous is not None else None
        claimed = {
            Path(r.result_path)
            for sid, r in self._results.items()
            if sid != result.session_id
        }

        attempt = 1
        while True:
            candidate = self._layout.record_path(
                result.template_name, result.start_time, attempt
            )
            if candidate == own:
                return candidate
            if candidate not in claimed and not candidate.exists():
                return candidate
            attempt += 1

    def _remove_file(self, path: Path, *, strict: bool) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            if strict:
                raise HistoryIOError(f"Cannot remove {path}: {exc}", path) from exc
            logger.warning("Failed to remove file %s: %s", path, exc)
