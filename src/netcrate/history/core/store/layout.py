# netcrate/history/core/store/layout.py
"""Filesystem layout for the result history.

Layout (root = settings.history_dir or ~/.netcrate/results):
  {root}/
    index.json                          summary index (derived, rebuildable)
    {template}-{YYYYmmdd-HHMMSS}.json   one file per execution result
    {template}-{YYYYmmdd-HHMMSS}-2.json second run of a template in the same second

File names only need to be unique and sortable; the scan never relies on
them to identify a session.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from netcrate.history.core.config import Settings
from netcrate.history.core.exceptions import ConfigurationError

RECORD_SUFFIX = ".json"
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def resolve_history_dir(settings: Settings) -> Path:
    """
    Work out where results live.

    Raises:
        ConfigurationError: If no directory is configured and the home
            directory cannot be determined
    """
    if settings.history_dir is not None:
        return Path(settings.history_dir).expanduser()
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigurationError(f"Cannot determine home directory: {exc}") from exc
    return home / ".netcrate" / "results"


@dataclass(frozen=True)
class HistoryLayout:
    root: Path
    index_filename: str = "index.json"

    @classmethod
    def from_settings(cls, settings: Settings) -> "HistoryLayout":
        return cls(root=resolve_history_dir(settings), index_filename=settings.index_filename)

    @property
    def index_path(self) -> Path:
        return self.root / self.index_filename

    def record_path(self, template_name: str, start_time: datetime, attempt: int = 1) -> Path:
        stamp = start_time.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
        stem = f"{_safe_name(template_name)}-{stamp}"
        if attempt > 1:
            stem = f"{stem}-{attempt}"
        return self.root / f"{stem}{RECORD_SUFFIX}"

    def is_record_file(self, path: Path) -> bool:
        return (
            path.is_file()
            and path.suffix == RECORD_SUFFIX
            and path.name != self.index_filename
        )

    def ensure(self) -> None:
        """
        Create the history directory if needed (idempotent).

        Raises:
            ConfigurationError: If the directory cannot be created
        """
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigurationError(
                f"Cannot create history directory {self.root}: {exc}"
            ) from exc
        if not self.root.is_dir():
            raise ConfigurationError(f"History path is not a directory: {self.root}")


def _safe_name(template_name: str) -> str:
    return _UNSAFE.sub("_", template_name).strip("._") or "result"
