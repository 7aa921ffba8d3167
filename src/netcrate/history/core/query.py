# netcrate/history/core/query.py
"""
Filtering, sorting and pagination over execution results.

Everything here is pure: functions take a snapshot of results and a
FilterCriteria and return a new list. The store owns the data; this module
never touches the filesystem.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Callable

from netcrate.history.contracts.criteria import FilterCriteria, SortField, SortOrder
from netcrate.history.contracts.result import ExecutionResult

logger = logging.getLogger(__name__)


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def _same_value(actual: Any, expected: Any) -> bool:
    """
    Equality that keeps JSON types apart: True does not equal 1. Integers and
    floats still compare by value since JSON does not distinguish them.
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    if isinstance(actual, (int, float)) and isinstance(expected, (int, float)):
        return actual == expected
    if isinstance(actual, dict) and isinstance(expected, dict):
        return actual.keys() == expected.keys() and all(
            _same_value(actual[k], expected[k]) for k in actual
        )
    if isinstance(actual, (list, tuple)) and isinstance(expected, (list, tuple)):
        return len(actual) == len(expected) and all(
            _same_value(a, e) for a, e in zip(actual, expected)
        )
    return type(actual) is type(expected) and actual == expected


def matches(result: ExecutionResult, criteria: FilterCriteria) -> bool:
    """True when the result satisfies every filter set on the criteria."""
    if criteria.from_time is not None and result.start_time < criteria.from_time:
        return False
    if criteria.to_time is not None and result.start_time > criteria.to_time:
        return False

    if criteria.template_name and not _contains(result.template_name, criteria.template_name):
        return False
    if criteria.session_id and not _contains(result.session_id, criteria.session_id):
        return False

    if criteria.status and result.status.value != criteria.status:
        return False

    # Tags: any requested tag matching any record tag is enough
    if criteria.tags:
        wanted = {t.casefold() for t in criteria.tags}
        if not any(t.casefold() in wanted for t in result.tags):
            return False

    # Parameters: every requested key must be present with an equal value
    for name, expected in criteria.parameters.items():
        if name not in result.parameters or not _same_value(result.parameters[name], expected):
            return False

    return True


_SORT_KEYS: dict[SortField, Callable[[ExecutionResult], Any]] = {
    SortField.start_time: lambda r: r.start_time,
    SortField.duration: lambda r: r.duration_timedelta(),
    SortField.template: lambda r: r.template_name,
    SortField.status: lambda r: r.status.value,
}


def sort_results(
    results: list[ExecutionResult],
    sort_by: SortField | None = None,
    sort_order: SortOrder = SortOrder.asc,
) -> list[ExecutionResult]:
    """
    Stable sort. Without ``sort_by`` results are newest first regardless of
    ``sort_order``; otherwise ascending unless ``sort_order`` is desc.
    """
    if sort_by is None:
        return sorted(results, key=_SORT_KEYS[SortField.start_time], reverse=True)

    return sorted(
        results,
        key=_SORT_KEYS[sort_by],
        reverse=sort_order == SortOrder.desc,
    )


def paginate(results: list[ExecutionResult], limit: int = 0, offset: int = 0) -> list[ExecutionResult]:
    """
    Slice after filtering and sorting.

    An offset past the end yields an empty list; a non-positive limit, or
    one larger than what remains, means no limit.
    """
    if offset > 0:
        if offset >= len(results):
            return []
        results = results[offset:]
    if 0 < limit < len(results):
        results = results[:limit]
    return results


class QueryEngine:
    """Applies a FilterCriteria to a set of results."""

    def list(
        self,
        results: Iterable[ExecutionResult],
        criteria: FilterCriteria | None = None,
    ) -> list[ExecutionResult]:
        criteria = criteria or FilterCriteria()

        # Deterministic input order keeps ties stable across repeated queries
        candidates = sorted(results, key=lambda r: r.session_id)
        filtered = [r for r in candidates if matches(r, criteria)]
        ordered = sort_results(filtered, criteria.sort_by, criteria.sort_order)
        page = paginate(ordered, criteria.limit, criteria.offset)

        logger.debug(
            "Query matched %d of %d result(s), returning %d",
            len(filtered),
            len(candidates),
            len(page),
        )
        return page
