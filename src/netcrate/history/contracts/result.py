# netcrate/history/contracts/result.py
"""
Execution result contracts.

An ExecutionResult is the outcome of one runner session. The runner builds it
when a session finishes and hands it to the history store exactly once; the
store assigns ``result_path`` and persists the record as a standalone JSON
document. Field names are the on-disk names.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    field_validator,
    model_serializer,
    model_validator,
)

from netcrate.history.contracts.index import IndexEntry
from netcrate.history.core.durations import parse_duration_or_zero
from netcrate.history.core.utils import ensure_aware


class ResultStatus(str, Enum):
    success = "success"
    failed = "failed"
    partial = "partial"


class StepResultData(BaseModel):
    """Outcome of a single template step."""

    name: str
    status: str
    start_time: datetime
    end_time: datetime
    duration: str = ""
    error: str | None = None
    output: Any = None
    message: str | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in ("error", "output", "message"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class ExecutionResult(BaseModel):
    """One completed (or partially completed) runner session."""

    session_id: str = Field(min_length=1)
    template_name: str
    start_time: datetime
    end_time: datetime
    duration: str = ""
    status: ResultStatus

    # Supplied verbatim by the runner, never interpreted here
    parameters: dict[str, Any] = Field(default_factory=dict)

    total_steps: int = Field(default=0, ge=0)
    completed_steps: int = Field(default=0, ge=0)
    failed_steps: int = Field(default=0, ge=0)
    skipped_steps: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)

    step_results: dict[str, StepResultData] = Field(default_factory=dict)

    log_path: str = ""
    result_path: str = ""

    tags: list[str] = Field(default_factory=list)

    @field_validator("parameters", "step_results", "tags", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "tags" else {}
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def _aware(cls, value: datetime) -> datetime:
        return ensure_aware(value)

    @model_validator(mode="after")
    def _check_step_counts(self) -> "ExecutionResult":
        accounted = self.completed_steps + self.failed_steps + self.skipped_steps
        if accounted > self.total_steps:
            raise ValueError(
                f"completed + failed + skipped steps ({accounted}) "
                f"exceeds total_steps ({self.total_steps})"
            )
        return self

    def duration_timedelta(self) -> timedelta:
        """Parsed duration; zero when the string is not parseable."""
        return parse_duration_or_zero(self.duration)

    def to_summary(self) -> IndexEntry:
        return IndexEntry(
            session_id=self.session_id,
            template_name=self.template_name,
            start_time=self.start_time,
            duration=self.duration,
            status=self.status.value,
            result_path=self.result_path,
            tags=list(self.tags),
        )
