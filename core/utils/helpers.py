"""
Meal arbiter utility functions
"""

from __future__ import annotations
import re
from datetime import datetime, timezone
from typing import Union


SECONDS_PER_DAY = 24 * 60 * 60

# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"([T ]\d{2}:\d{2}:\d{2})\.(\d+)")


# Time utilities

def _normalize_fraction(match: re.Match) -> str:
    digits = match.group(2)[:6].ljust(6, "0")
    return f"{match.group(1)}.{digits}"


def parse_iso_datetime(value: Union[str, datetime]) -> datetime:
    """Parse an ISO 8601 timestamp, keeping the offset it carries.

    Accepts a trailing ``Z`` for UTC and any number of fractional second
    digits (truncated to microseconds). Raises ValueError on malformed input.
    """
    if isinstance(value, datetime):
        return value
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(_normalize_fraction, text, count=1)
    return datetime.fromisoformat(text)


def as_utc(value: Union[str, datetime]) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    dt = parse_iso_datetime(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_between(start: Union[str, datetime], end: Union[str, datetime]) -> float:
    """Fractional days from start to end, never negative."""
    delta = as_utc(end) - as_utc(start)
    return max(0.0, delta.total_seconds() / SECONDS_PER_DAY)


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)
