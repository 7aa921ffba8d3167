# netcrate/history/core/store/index.py
"""Summary index written alongside the record files."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from netcrate.history.contracts.index import HistoryIndex
from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.core.exceptions import HistoryIOError, IndexWriteError
from netcrate.history.core.store.codec import write_text_atomic
from netcrate.history.core.store.layout import HistoryLayout
from netcrate.history.core.utils import utc_now

logger = logging.getLogger(__name__)


def build_index(
    results: Iterable[ExecutionResult], now: datetime | None = None
) -> HistoryIndex:
    # Newest first so the file reads like `history list`
    entries = sorted(
        (r.to_summary() for r in results),
        key=lambda e: (e.start_time, e.session_id),
        reverse=True,
    )
    return HistoryIndex(
        last_updated=now or utc_now(),
        total_results=len(entries),
        results=entries,
    )


def write_index(layout: HistoryLayout, results: Iterable[ExecutionResult]) -> HistoryIndex:
    """
    Rewrite the index from the given results.

    Raises:
        IndexWriteError: If the index file cannot be written
    """
    index = build_index(results)
    try:
        write_text_atomic(layout.index_path, index.model_dump_json(indent=2))
    except HistoryIOError as exc:
        raise IndexWriteError(str(exc), layout.index_path) from exc
    logger.debug("Wrote index with %d entries: %s", index.total_results, layout.index_path)
    return index
