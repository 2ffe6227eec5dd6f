"""
Timestamp parsing and timezone normalization.

Track timestamps arrive either as `datetime` objects (from the GPX parser) or as ISO-8601
strings (from JSON payloads). Durations are computed on timezone-aware datetimes so that
naive and aware values never get mixed.
"""

from __future__ import annotations

from datetime import datetime, timezone


def ensure_tz(dt: datetime) -> datetime:
    """Ensure `dt` has tzinfo; GPX times without an offset are UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse a track timestamp into an aware datetime.

    Notes:
    - Accepts a trailing `Z` (UTC) and converts it to `+00:00` for `fromisoformat`.
    - Raises `ValueError` for strings that are not ISO-8601.
    """
    if isinstance(value, datetime):
        return ensure_tz(value)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return ensure_tz(datetime.fromisoformat(text))


def hours_between(start: datetime | str, end: datetime | str) -> float:
    """Elapsed hours from `start` to `end` (negative if `end` is earlier)."""
    return (parse_timestamp(end) - parse_timestamp(start)).total_seconds() / 3600
