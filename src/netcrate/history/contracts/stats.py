# netcrate/history/contracts/stats.py
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pydantic import BaseModel, Field

from netcrate.history.core.durations import format_duration

_DISPLAY_TIME = "%Y-%m-%d %H:%M:%S"


class HistoryStats(BaseModel):
    """
    Aggregates over the stored history.

    On an empty history only ``total_results`` (zero) and the directory paths
    are populated.
    """

    total_results: int = 0
    status_counts: dict[str, int] = Field(default_factory=dict)
    template_counts: dict[str, int] = Field(default_factory=dict)
    tag_counts: dict[str, int] = Field(default_factory=dict)
    oldest_result: datetime | None = None
    newest_result: datetime | None = None
    total_duration: timedelta | None = None
    average_duration: timedelta | None = None
    history_dir: str = ""
    index_path: str = ""

    def to_display(self) -> dict[str, Any]:
        """Flat, human-readable rendering for CLI output."""
        if self.total_results == 0:
            return {"total_results": 0}

        return {
            "total_results": self.total_results,
            "status_counts": dict(self.status_counts),
            "template_counts": dict(self.template_counts),
            "tag_counts": dict(self.tag_counts),
            "oldest_result": self.oldest_result.strftime(_DISPLAY_TIME)
            if self.oldest_result
            else "",
            "newest_result": self.newest_result.strftime(_DISPLAY_TIME)
            if self.newest_result
            else "",
            "total_duration": format_duration(self.total_duration or timedelta(0)),
            "average_duration": format_duration(self.average_duration or timedelta(0)),
            "history_dir": self.history_dir,
            "index_path": self.index_path,
        }
