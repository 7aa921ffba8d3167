# netcrate/history/contracts/index.py
"""
Index file contracts.

The index is a derived summary of every record in the history directory. It
exists for people browsing the directory and is never read back on load: the
record files are the source of truth and the index can be rebuilt from them
at any time.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

INDEX_VERSION = "1.0"


class IndexEntry(BaseModel):
    session_id: str
    template_name: str
    start_time: datetime
    duration: str
    status: str
    result_path: str
    tags: list[str] = Field(default_factory=list)


class HistoryIndex(BaseModel):
    version: str = INDEX_VERSION
    last_updated: datetime
    total_results: int
    results: list[IndexEntry] = Field(default_factory=list)
