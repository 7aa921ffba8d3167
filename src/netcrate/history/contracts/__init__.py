"""Public contracts for the result history."""
from netcrate.history.contracts.criteria import FilterCriteria, SortField, SortOrder
from netcrate.history.contracts.index import INDEX_VERSION, HistoryIndex, IndexEntry
from netcrate.history.contracts.result import ExecutionResult, ResultStatus, StepResultData
from netcrate.history.contracts.stats import HistoryStats
from netcrate.history.contracts.store import ResultHistory

__all__ = [
    "ExecutionResult", "ResultStatus", "StepResultData",
    "FilterCriteria", "SortField", "SortOrder",
    "HistoryIndex", "IndexEntry", "INDEX_VERSION",
    "HistoryStats",
    "ResultHistory",
]
