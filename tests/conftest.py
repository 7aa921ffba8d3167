# tests/conftest.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import pytest

from netcrate.history.contracts.result import ExecutionResult, ResultStatus, StepResultData
from netcrate.history.core.store.layout import HistoryLayout
from netcrate.history.core.store.store import FileResultStore

BASE_TIME = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)

ResultFactory = Callable[..., ExecutionResult]


@pytest.fixture
def make_result() -> ResultFactory:
    """Build an ExecutionResult with overridable defaults."""

    def _make(
        session_id: str = "sess-1",
        template_name: str = "scan",
        start_time: datetime = BASE_TIME,
        duration: str = "1m30s",
        status: ResultStatus | str = ResultStatus.success,
        tags: list[str] | None = None,
        parameters: dict[str, Any] | None = None,
        **overrides: Any,
    ) -> ExecutionResult:
        fields: dict[str, Any] = {
            "session_id": session_id,
            "template_name": template_name,
            "start_time": start_time,
            "end_time": start_time + timedelta(seconds=90),
            "duration": duration,
            "status": status,
            "parameters": parameters if parameters is not None else {"target": "10.0.0.0/24"},
            "total_steps": 2,
            "completed_steps": 2,
            "step_results": {
                "discover": StepResultData(
                    name="discover",
                    status="completed",
                    start_time=start_time,
                    end_time=start_time + timedelta(seconds=30),
                    duration="30s",
                    output={"hosts": ["10.0.0.1", "10.0.0.7"]},
                ),
            },
            "tags": tags if tags is not None else [],
        }
        fields.update(overrides)
        return ExecutionResult(**fields)

    return _make


@pytest.fixture
def layout(tmp_path: Path) -> HistoryLayout:
    """History layout rooted in a temporary directory."""
    return HistoryLayout(root=tmp_path / "results")


@pytest.fixture
def store(layout: HistoryLayout) -> FileResultStore:
    """An initialized, empty store."""
    s = FileResultStore(layout)
    s.initialize()
    return s
