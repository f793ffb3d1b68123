"""
Calendar date <-> stored instant conversion.

A date picked by the user carries no time of day or timezone. Anchoring it at
midnight UTC shows up as the previous day for anyone west of UTC, so every
transaction is stored at 12:00:00 UTC of its calendar day instead. Any offset
strictly between -12:00 and +12:00 still lands on the same local day.
"""
from datetime import datetime, timezone
from typing import Optional, Union

ANCHOR_HOUR = 12


def to_instant(year: int, month: int, day: int) -> datetime:
    """Return the aware instant at midday UTC of the given calendar date."""
    return datetime(year, month, day, ANCHOR_HOUR, 0, 0, tzinfo=timezone.utc)


def to_iso(instant: datetime) -> str:
    """Render an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    utc = instant.astimezone(timezone.utc)
    return (
        f"{to_calendar_date_string(utc)}T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )


def parse_instant(text: str) -> datetime:
    """Parse a stored ISO-8601 string. Naive values are read as UTC."""
    value = text.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_calendar_date_string(timestamp: Union[str, datetime]) -> str:
    """UTC calendar date of a stored instant, as ``YYYY-MM-DD``."""
    instant = parse_instant(timestamp) if isinstance(timestamp, str) else timestamp
    if instant.tzinfo is not None:
        instant = instant.astimezone(timezone.utc)
    return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"


def today_string(now: Optional[datetime] = None) -> str:
    return to_calendar_date_string(now or datetime.now(timezone.utc))
