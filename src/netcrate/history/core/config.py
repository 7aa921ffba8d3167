# netcrate/history/core/config.py
"""
Central configuration for the result history.

Environment variables (prefix ``NETCRATE_``) override defaults. When no
history directory is configured, results live under the user's home
directory in ``.netcrate/results``.
"""
from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_prefix="NETCRATE_", env_file=".env", extra="ignore"
    )

    log_level: str = "INFO"

    history_dir: Path | None = Field(
        default=None,
        description="Directory holding result files (empty = ~/.netcrate/results)",
    )
    index_filename: str = Field(
        default="index.json",
        description="Name of the summary index inside the history directory",
    )


settings = Settings()
