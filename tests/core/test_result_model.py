# tests/core/test_result_model.py
"""Tests for the ExecutionResult record model."""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from netcrate.history.contracts.result import ExecutionResult, ResultStatus, StepResultData
from netcrate.history.core.store.codec import encode_result


class TestExecutionResult:
    """Tests for ExecutionResult validation and helpers."""

    def test_step_counts_within_total(self, make_result):
        """Test that accounted steps may equal total_steps."""
        result = make_result(total_steps=5, completed_steps=3, failed_steps=1, skipped_steps=1)

        assert result.total_steps == 5

    def test_step_counts_exceeding_total_rejected(self, make_result):
        """Test the completed + failed + skipped <= total invariant."""
        with pytest.raises(ValidationError):
            make_result(total_steps=2, completed_steps=2, failed_steps=1)

    def test_negative_counter_rejected(self, make_result):
        """Test that step counters cannot be negative."""
        with pytest.raises(ValidationError):
            make_result(error_count=-1)

    def test_unknown_status_rejected(self, make_result):
        """Test that status must be success, failed or partial."""
        with pytest.raises(ValidationError):
            make_result(status="exploded")

    def test_status_from_string(self, make_result):
        """Test that plain strings are accepted for status."""
        result = make_result(status="partial")

        assert result.status is ResultStatus.partial

    def test_naive_times_are_utc(self, make_result):
        """Test that naive datetimes are interpreted as UTC."""
        result = make_result(start_time=datetime(2026, 1, 1, 8, 0, 0))

        assert result.start_time.tzinfo is not None
        assert result.start_time == datetime(2026, 1, 1, 8, 0, 0, tzinfo=timezone.utc)

    def test_null_collections_become_empty(self):
        """Test that null tags/parameters/step_results load as empty."""
        doc = {
            "session_id": "s",
            "template_name": "t",
            "start_time": "2026-01-01T00:00:00Z",
            "end_time": "2026-01-01T00:00:01Z",
            "duration": "1s",
            "status": "success",
            "parameters": None,
            "step_results": None,
            "tags": None,
        }

        result = ExecutionResult.model_validate(doc)

        assert result.tags == []
        assert result.parameters == {}
        assert result.step_results == {}

    def test_duration_timedelta(self, make_result):
        """Test parsed duration helper."""
        assert make_result(duration="2m").duration_timedelta() == timedelta(minutes=2)
        assert make_result(duration="n/a").duration_timedelta() == timedelta(0)

    def test_to_summary(self, make_result):
        """Test index summary projection."""
        result = make_result(tags=["nightly", "lan"], result_path="/tmp/x.json")

        summary = result.to_summary()

        assert summary.session_id == result.session_id
        assert summary.status == "success"
        assert summary.result_path == "/tmp/x.json"
        assert summary.tags == ["nightly", "lan"]


class TestRecordDocument:
    """Tests for the on-disk JSON shape of a record."""

    def test_snake_case_fields(self, make_result):
        """Test that every documented field is written."""
        doc = json.loads(encode_result(make_result()))

        assert set(doc) == {
            "session_id", "template_name", "start_time", "end_time", "duration",
            "status", "parameters", "total_steps", "completed_steps", "failed_steps",
            "skipped_steps", "error_count", "step_results", "log_path",
            "result_path", "tags",
        }

    def test_pretty_printed(self, make_result):
        """Test two-space indentation."""
        text = encode_result(make_result())

        assert text.startswith('{\n  "session_id"')

    def test_empty_step_fields_omitted(self, make_result):
        """Test that unset error/message/output are left out of step documents."""
        doc = json.loads(encode_result(make_result()))
        step = doc["step_results"]["discover"]

        assert "error" not in step
        assert "message" not in step
        assert step["output"] == {"hosts": ["10.0.0.1", "10.0.0.7"]}

    def test_round_trip(self, make_result):
        """Test that a record survives serialization unchanged."""
        start = datetime(2026, 3, 4, 5, 6, 7, 123000, tzinfo=timezone.utc)
        original = make_result(
            start_time=start,
            status=ResultStatus.partial,
            total_steps=3,
            completed_steps=1,
            failed_steps=1,
            skipped_steps=1,
            error_count=2,
            parameters={
                "ports": [22, 80, 443],
                "rate": 1.5,
                "dry_run": False,
                "profile": {"name": "fast", "retries": 2},
                "note": None,
            },
            step_results={
                "scan": StepResultData(
                    name="scan",
                    status="failed",
                    start_time=start,
                    end_time=start + timedelta(seconds=2),
                    duration="2s",
                    error="permission denied",
                    message="raw socket unavailable",
                ),
            },
            tags=["weekly", "dmz"],
            log_path="/var/log/netcrate/run.log",
        )

        restored = ExecutionResult.model_validate_json(encode_result(original))

        assert restored == original
