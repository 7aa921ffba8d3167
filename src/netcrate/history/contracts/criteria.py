# netcrate/history/contracts/criteria.py
"""Query descriptor for listing execution results."""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from netcrate.history.core.utils import ensure_aware


class SortField(str, Enum):
    start_time = "start_time"
    duration = "duration"
    template = "template"
    status = "status"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class FilterCriteria(BaseModel):
    """
    Filters, sort and pagination for a history listing.

    Every supplied filter must hold. Within ``tags`` any requested tag is
    enough (match-any); within ``parameters`` every requested key must be
    present with an equal value (match-all).

    Example:
        FilterCriteria(status="success", tags=["nightly"], limit=10)
    """

    from_time: datetime | None = None
    to_time: datetime | None = None

    # Case-insensitive substring matches
    template_name: str | None = None
    session_id: str | None = None

    status: str | None = None
    tags: list[str] = Field(default_factory=list)
    parameters: dict[str, Any] = Field(default_factory=dict)

    limit: int = 0
    offset: int = 0

    sort_by: SortField | None = None
    sort_order: SortOrder = SortOrder.asc

    @field_validator("from_time", "to_time")
    @classmethod
    def _aware(cls, value: datetime | None) -> datetime | None:
        return ensure_aware(value) if value is not None else None
