"""
Date helpers shared by the data, business and presentation layers.

All calendar dates travel as ISO ``YYYY-MM-DD`` strings on the wire and as
``datetime.date`` inside the application. "Today" is the UTC calendar date.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Union


def utcnow() -> datetime:
    """Naive UTC timestamp, matching what the DateTime columns store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def add_days(start: date, days: int) -> date:
    """Calendar-day arithmetic; month and year rollover come from timedelta."""
    return start + timedelta(days=days)


def parse_iso_date(value: Union[str, date, None]) -> Optional[date]:
    """
    Parse an ISO date string.

    Accepts a full ISO timestamp as well and keeps only its date part, since
    browsers frequently send ``2025-06-18T00:00:00.000Z``.

    Raises:
        ValueError: if the value is not an ISO date
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO date string, got {type(value).__name__}")
    text = value.strip()
    if 'T' in text:
        text = text.split('T', 1)[0]
    return date.fromisoformat(text)


def parse_iso_datetime(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """
    Parse an ISO timestamp into a naive UTC datetime.

    A trailing ``Z`` or an explicit offset is converted to UTC; a bare date
    means midnight of that day.

    Raises:
        ValueError: if the value is not an ISO timestamp
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Expected an ISO timestamp string, got {type(value).__name__}")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso(value: Union[date, datetime, None]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()
