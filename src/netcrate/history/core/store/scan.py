# netcrate/history/core/store/scan.py
"""
Rebuild the in-memory result set from the record files.

The scan is a fold over the files in the history directory. Every file that
cannot be read or decoded becomes a ScanWarning; one corrupt record never
prevents the rest of the history from loading. The index file is never
consulted.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.core.exceptions import HistoryIOError, ParseError
from netcrate.history.core.store.codec import read_result
from netcrate.history.core.store.layout import HistoryLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScanWarning:
    path: Path
    reason: str


@dataclass
class ScanReport:
    records: dict[str, ExecutionResult] = field(default_factory=dict)
    warnings: list[ScanWarning] = field(default_factory=list)
    # Older files for a session whose record was taken from a later file
    shadowed: dict[str, list[Path]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.warnings


def scan_directory(layout: HistoryLayout) -> ScanReport:
    """
    Load every record file under the layout root.

    Files are visited in name order, so when two files carry the same
    session id the later name wins and the earlier one is reported.

    Raises:
        HistoryIOError: If the directory itself cannot be listed
    """
    try:
        entries = sorted(layout.root.iterdir())
    except OSError as exc:
        raise HistoryIOError(
            f"Cannot list history directory {layout.root}: {exc}", layout.root
        ) from exc

    report = ScanReport()
    for path in entries:
        if not layout.is_record_file(path):
            continue
        _fold(report, path)

    logger.info(
        "Loaded %d result(s) from %s (%d skipped)",
        len(report.records),
        layout.root,
        len(report.warnings),
    )
    return report


def _fold(report: ScanReport, path: Path) -> None:
    try:
        result = read_result(path)
    except (ParseError, HistoryIOError) as exc:
        logger.warning("Failed to load result from %s: %s", path, exc)
        report.warnings.append(ScanWarning(path=path, reason=str(exc)))
        return

    previous = report.records.get(result.session_id)
    if previous is not None:
        reason = f"duplicate session {result.session_id}, superseded by {path.name}"
        logger.warning("Ignoring %s: %s", previous.result_path, reason)
        report.warnings.append(ScanWarning(path=Path(previous.result_path), reason=reason))
        report.shadowed.setdefault(result.session_id, []).append(Path(previous.result_path))

    report.records[result.session_id] = result
