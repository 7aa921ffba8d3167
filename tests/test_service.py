# tests/test_service.py
"""Tests for HistoryService, the collaborator-facing facade."""
from __future__ import annotations

import threading
from datetime import timedelta
from pathlib import Path

import pytest

from netcrate.history.contracts.criteria import FilterCriteria
from netcrate.history.contracts.store import ResultHistory
from netcrate.history.core.config import Settings
from netcrate.history.core.exceptions import ConfigurationError, NotFoundError
from netcrate.history.core.utils import utc_now
from netcrate.history.service import HistoryService


@pytest.fixture
def service(tmp_path: Path) -> HistoryService:
    return HistoryService.from_settings(Settings(_env_file=None, history_dir=tmp_path / "results"))


class TestHistoryService:
    """Tests for HistoryService."""

    def test_satisfies_protocol(self, service: HistoryService):
        """Test that the service implements ResultHistory."""
        assert isinstance(service, ResultHistory)

    def test_from_settings_creates_directory(self, tmp_path: Path):
        """Test that construction resolves and creates the directory."""
        HistoryService.from_settings(Settings(_env_file=None, history_dir=tmp_path / "a" / "b"))

        assert (tmp_path / "a" / "b").is_dir()

    def test_from_settings_fails_on_unusable_dir(self, tmp_path: Path):
        """Test that initialization failures abort construction."""
        blocker = tmp_path / "results"
        blocker.write_text("file, not a directory")

        with pytest.raises(ConfigurationError):
            HistoryService.from_settings(Settings(_env_file=None, history_dir=blocker))

    def test_status_filter_scenario(self, service: HistoryService, make_result):
        """Test listing successes among mixed templates and statuses."""
        now = utc_now()
        service.save(make_result(session_id="s1", template_name="scan", status="success",
                                 start_time=now - timedelta(hours=3)))
        service.save(make_result(session_id="s2", template_name="scan", status="failed",
                                 start_time=now - timedelta(hours=2)))
        service.save(make_result(session_id="s3", template_name="probe", status="success",
                                 start_time=now - timedelta(hours=1)))

        results = service.list(FilterCriteria(status="success"))

        assert [r.session_id for r in results] == ["s3", "s1"]
        assert [r.template_name for r in results] == ["probe", "scan"]

    def test_cleanup_scenario(self, service: HistoryService, make_result):
        """Test a 24h sweep over a 48h-old and a 1h-old result."""
        now = utc_now()
        service.save(make_result(session_id="old", start_time=now - timedelta(hours=48)))
        service.save(make_result(session_id="new", start_time=now - timedelta(hours=1)))

        count = service.cleanup_older_than(timedelta(hours=24))

        assert count == 1
        assert [r.session_id for r in service.list()] == ["new"]

    def test_delete_unknown(self, service: HistoryService, make_result):
        """Test NotFoundError leaves the count unchanged."""
        service.save(make_result(session_id="s1"))

        with pytest.raises(NotFoundError):
            service.delete("ghost")

        assert len(service) == 1

    def test_delete_known(self, service: HistoryService, make_result):
        """Test that a deleted result disappears from list/get and disk."""
        service.save(make_result(session_id="s1"))
        path = Path(service.get("s1").result_path)

        service.delete("s1")

        assert service.get("s1") is None
        assert service.list() == []
        assert not path.exists()

    def test_load_picks_up_external_changes(self, service: HistoryService, make_result, tmp_path: Path):
        """Test that load() rescans the directory."""
        service.save(make_result(session_id="s1"))
        other = HistoryService.from_settings(
            Settings(_env_file=None, history_dir=tmp_path / "results")
        )
        other.save(make_result(session_id="s2", template_name="probe"))

        service.load()

        assert {r.session_id for r in service.list()} == {"s1", "s2"}
        assert service.last_scan is not None and service.last_scan.ok

    def test_stats_include_paths(self, service: HistoryService, make_result):
        """Test stats report where history lives."""
        service.save(make_result(session_id="s1"))

        stats = service.stats()

        assert stats.total_results == 1
        assert stats.history_dir == str(service.layout.root)
        assert stats.index_path == str(service.layout.index_path)

    def test_rebuild_index(self, service: HistoryService, make_result):
        """Test explicit index rebuild."""
        service.save(make_result(session_id="s1"))
        service.layout.index_path.unlink()

        index = service.rebuild_index()

        assert index.total_results == 1
        assert service.layout.index_path.exists()

    def test_concurrent_saves(self, service: HistoryService, make_result):
        """Test that concurrent callers are serialized."""
        results = [
            make_result(session_id=f"s{i}", template_name=f"t{i}") for i in range(20)
        ]
        threads = [threading.Thread(target=service.save, args=(r,)) for r in results]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(service) == 20
        assert len(list(service.layout.root.glob("t*-*.json"))) == 20
