# netcrate/history/core/durations.py
"""
Elapsed-time strings as written by the runner.

The runner records durations in compact unit notation such as ``"1h2m3.5s"``,
``"850ms"`` or ``"0s"``. Accepted units: h, m, s, ms, us (or µs), ns.
Precision is limited to microseconds; nanoseconds are truncated.
"""
from __future__ import annotations

import re
from datetime import timedelta
from decimal import Decimal, InvalidOperation

_UNIT_MICROSECONDS: dict[str, Decimal] = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),
    "μs": Decimal(1),
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


class DurationParseError(ValueError):
    """Raised when a duration string is not in runner notation."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid duration: {value!r}")


def parse_duration(value: str) -> timedelta:
    """
    Parse a runner duration string into a timedelta.

    Raises:
        DurationParseError: If the string is empty or malformed
    """
    text = value.strip()
    if not text:
        raise DurationParseError(value)

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _COMPONENT.match(text, pos)
        if match is None:
            raise DurationParseError(value)
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation as exc:
            raise DurationParseError(value) from exc
        total += amount * _UNIT_MICROSECONDS[match.group(2)]
        pos = match.end()

    if pos == 0:
        raise DurationParseError(value)

    try:
        return sign * timedelta(microseconds=int(total))
    except OverflowError as exc:
        raise DurationParseError(value) from exc


def parse_duration_or_zero(value: str | None) -> timedelta:
    if not value:
        return timedelta(0)
    try:
        return parse_duration(value)
    except DurationParseError:
        return timedelta(0)


def _trim(whole: int, frac: int, width: int) -> str:
    if not frac:
        return str(whole)
    digits = f"{frac:0{width}d}".rstrip("0")
    return f"{whole}.{digits}"


def format_duration(value: timedelta) -> str:
    """Render a timedelta in runner notation; inverse of parse_duration."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"

    prefix = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{prefix}{micros}µs"
    if micros < 1_000_000:
        return f"{prefix}{_trim(micros // 1_000, micros % 1_000, 3)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim(rest // 1_000_000, rest % 1_000_000, 6)

    if hours:
        return f"{prefix}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{prefix}{minutes}m{seconds}s"
    return f"{prefix}{seconds}s"
