"""Time helpers: UTC clock and summary date formatting.

All window math works on timezone-aware datetimes; naive values are
interpreted as UTC.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

__all__ = [
    "SUMMARY_DATE_FORMAT",
    "ensure_utc",
    "format_summary_date",
    "get_current_utc",
    "parse_summary_date",
]

# YYYY-MM-DD, used for the query window and daily record identifiers
SUMMARY_DATE_FORMAT = "%Y-%m-%d"


def get_current_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_summary_date(value: str) -> datetime:
    """Parse a ``range.start`` style timestamp.

    Accepts ISO-8601 with ``Z`` or an offset, and plain ``YYYY-MM-DD``.

    Raises
    ------
    ValueError
        If the value is not a recognizable date
    """
    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))


def format_summary_date(value: datetime | date | str) -> str:
    """Normalize a date-ish value to ``YYYY-MM-DD``.

    Timestamps keep their own calendar date (no timezone conversion), so
    ``2025-10-08T00:00:00-04:00`` stays ``2025-10-08``.
    """
    if isinstance(value, str):
        value = parse_summary_date(value)
    return value.strftime(SUMMARY_DATE_FORMAT)
