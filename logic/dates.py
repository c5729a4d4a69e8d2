"""Calendar-day normalisation shared by the form, the gallery and the backend.

Entries are grouped by the UTC calendar day of their timestamp. Two entries
land on the same gallery page exactly when ``normalize_day`` returns the same
string for both.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(raw: str) -> Optional[datetime]:
    cleaned = raw.replace("Z", "+00:00").replace("z", "+00:00")
    try:
        return datetime.fromisoformat(cleaned)
    except ValueError:
        return None


def normalize_day(value: object) -> Optional[str]:
    """Truncate a timestamp to its ``YYYY-MM-DD`` day in UTC.

    Accepts ``datetime``/``date`` objects and ISO-8601 strings. Naive
    timestamps are read as UTC. Returns ``None`` for empty or unparseable
    input. Already-normalised day strings come back unchanged.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    raw = value.strip()
    if not raw:
        return None
    if len(raw) == 10:
        try:
            return date.fromisoformat(raw).isoformat()
        except ValueError:
            return None

    parsed = _parse_timestamp(raw)
    if parsed is None:
        return None
    return normalize_day(parsed)


def day_to_timestamp(day: Optional[str]) -> Optional[str]:
    """Turn a date-field value into an absolute UTC midnight timestamp."""

    normalized = normalize_day(day)
    if normalized is None:
        return None
    midnight = datetime.combine(date.fromisoformat(normalized), datetime.min.time(), tzinfo=timezone.utc)
    return midnight.isoformat().replace("+00:00", "Z")


def today(clock: Clock | None = None) -> str:
    """Today's day string in UTC."""

    now = (clock or _utc_now)()
    return normalize_day(now) or _utc_now().date().isoformat()


__all__ = ["Clock", "day_to_timestamp", "normalize_day", "today"]
