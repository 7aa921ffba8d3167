# netcrate/history/core/store/codec.py
"""Record file encoding: one pretty-printed JSON document per result."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from netcrate.history.contracts.result import ExecutionResult
from netcrate.history.core.exceptions import HistoryIOError, ParseError

logger = logging.getLogger(__name__)


def encode_result(result: ExecutionResult) -> str:
    return result.model_dump_json(indent=2)


def decode_result(text: str | bytes, path: Path) -> ExecutionResult:
    """
    Raises:
        ParseError: If the document is not a valid execution result
    """
    try:
        result = ExecutionResult.model_validate_json(text)
    except ValidationError as exc:
        raise ParseError(path, f"{exc.error_count()} validation error(s): {exc}") from exc
    # The file we read from is authoritative for where the record lives
    result.result_path = str(path)
    return result


def read_result(path: Path) -> ExecutionResult:
    """
    Raises:
        HistoryIOError: If the file cannot be read
        ParseError: If its contents cannot be decoded
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise HistoryIOError(f"Cannot read result file {path}: {exc}", path) from exc
    return decode_result(data, path)


def write_text_atomic(path: Path, text: str) -> None:
    """
    Write via a sibling temp file and rename over the target.

    Raises:
        HistoryIOError: If the file cannot be written
    """
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove temp file %s", tmp)
        raise HistoryIOError(f"Cannot write {path}: {exc}", path) from exc


def write_result(result: ExecutionResult, path: Path) -> None:
    write_text_atomic(path, encode_result(result))
