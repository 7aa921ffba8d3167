# netcrate/history/core/maintenance.py
"""Statistics and age-based retention for the result history."""
from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from datetime import datetime, timedelta

from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.contracts.stats import HistoryStats
from netcrate.history.core.exceptions import HistoryError
from netcrate.history.core.store.store import FileResultStore
from netcrate.history.core.utils import ensure_aware, utc_now

logger = logging.getLogger(__name__)


def compute_stats(
    results: Sequence[ExecutionResult],
    history_dir: str = "",
    index_path: str = "",
) -> HistoryStats:
    """
    Aggregate counts, time range and durations.

    Unparseable durations count as zero but still count towards the
    average's denominator.
    """
    if not results:
        return HistoryStats(total_results=0, history_dir=history_dir, index_path=index_path)

    status_counts: Counter[str] = Counter()
    template_counts: Counter[str] = Counter()
    tag_counts: Counter[str] = Counter()
    total_us = 0

    for result in results:
        status_counts[result.status.value] += 1
        template_counts[result.template_name] += 1
        tag_counts.update(result.tags)
        total_us += _microseconds(result.duration_timedelta())

    total = _clamped(total_us)
    average = _clamped(total_us // len(results))

    return HistoryStats(
        total_results=len(results),
        status_counts=dict(status_counts),
        template_counts=dict(template_counts),
        tag_counts=dict(tag_counts),
        oldest_result=min(r.start_time for r in results),
        newest_result=max(r.start_time for r in results),
        total_duration=total,
        average_duration=average,
        history_dir=history_dir,
        index_path=index_path,
    )


def cleanup_older_than(
    store: FileResultStore,
    max_age: timedelta,
    now: datetime | None = None,
) -> int:
    """
    Delete every result that started before ``now - max_age``.

    Individual delete failures are logged and the sweep carries on.

    Returns:
        Number of results selected for deletion (attempted, not necessarily
        all removed)

    Raises:
        ValueError: If max_age is negative
    """
    if max_age < timedelta(0):
        raise ValueError(f"max_age must not be negative, got {max_age}")

    cutoff = ensure_aware(now) - max_age if now is not None else utc_now() - max_age
    expired = [r.session_id for r in store.records() if r.start_time < cutoff]

    for session_id in expired:
        try:
            store.delete(session_id)
        except HistoryError:
            logger.warning("Failed to delete result %s", session_id, exc_info=True)

    if expired:
        remaining = sum(1 for sid in expired if sid in store)
        logger.info(
            "Cleanup removed %d of %d result(s) older than %s",
            len(expired) - remaining,
            len(expired),
            cutoff.isoformat(),
        )
    return len(expired)


def _microseconds(value: timedelta) -> int:
    return (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds


def _clamped(micros: int) -> timedelta:
    # Summed durations can exceed what a timedelta holds
    try:
        return timedelta(microseconds=micros)
    except OverflowError:
        return timedelta.max if micros > 0 else timedelta.min
