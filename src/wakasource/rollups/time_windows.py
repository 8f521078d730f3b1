"""Query window resolution.

Turn a relative timespan ("7day", "30day", "2 weeks") plus "now" into the
absolute start/end dates sent to the summaries endpoint.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

import pytz

from ..core.errors import InvalidConfiguration
from ..core.time import SUMMARY_DATE_FORMAT, ensure_utc, get_current_utc

__all__ = [
    "DEFAULT_TIMESPAN",
    "DateWindow",
    "parse_timespan",
    "resolve_window",
]

DEFAULT_TIMESPAN = "7day"

_TIMESPAN_PATTERN = re.compile(
    r"^(?P<value>-?(?:\d+)?\.?\d+) *"
    r"(?P<unit>milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?$",
    re.IGNORECASE,
)

_UNIT_MILLISECONDS = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
    "y": 365.25 * 24 * 60 * 60 * 1000,
}

_UNIT_ALIASES = {
    "milliseconds": "ms",
    "millisecond": "ms",
    "msecs": "ms",
    "msec": "ms",
    "ms": "ms",
    "seconds": "s",
    "second": "s",
    "secs": "s",
    "sec": "s",
    "s": "s",
    "minutes": "m",
    "minute": "m",
    "mins": "m",
    "min": "m",
    "m": "m",
    "hours": "h",
    "hour": "h",
    "hrs": "h",
    "hr": "h",
    "h": "h",
    "days": "d",
    "day": "d",
    "d": "d",
    "weeks": "w",
    "week": "w",
    "w": "w",
    "years": "y",
    "year": "y",
    "yrs": "y",
    "yr": "y",
    "y": "y",
}


@dataclass(frozen=True)
class DateWindow:
    """Absolute date window for one fetch.

    Attributes
    ----------
    start_date : date
        First day of the window (inclusive)
    end_date : date
        Last day of the window (inclusive, "today")
    timespan : str
        Expression the window was resolved from
    timezone : str
        Timezone the dates were truncated in
    """

    start_date: date
    end_date: date
    timespan: str = DEFAULT_TIMESPAN
    timezone: str = "UTC"

    @property
    def start(self) -> str:
        return self.start_date.strftime(SUMMARY_DATE_FORMAT)

    @property
    def end(self) -> str:
        return self.end_date.strftime(SUMMARY_DATE_FORMAT)

    @property
    def days(self) -> int:
        """Number of calendar days covered, both ends included."""
        return (self.end_date - self.start_date).days + 1

    def to_query_params(self) -> dict[str, str]:
        return {"start": self.start, "end": self.end}


def parse_timespan(timespan: str) -> timedelta:
    """Parse a duration expression into a timedelta.

    Parameters
    ----------
    timespan
        Number with optional unit, e.g. "7day", "30 days", "2w", "1.5h".
        A bare number is read as milliseconds.

    Returns
    -------
    timedelta
        Parsed duration (always positive)

    Raises
    ------
    InvalidConfiguration
        If the expression is empty, unparseable or not positive

    Examples
    --------
    >>> parse_timespan("7day")
    datetime.timedelta(days=7)
    >>> parse_timespan("36h")
    datetime.timedelta(days=1, seconds=43200)
    """
    if not isinstance(timespan, str) or not timespan.strip() or len(timespan) > 100:
        raise InvalidConfiguration(f"Invalid timespan: {timespan!r}")

    match = _TIMESPAN_PATTERN.match(timespan.strip())
    if not match:
        raise InvalidConfiguration(
            f"Invalid timespan: {timespan!r}. Use a duration expression such as '7day' or '30 days'"
        )

    value = float(match.group("value"))
    unit = _UNIT_ALIASES[(match.group("unit") or "ms").lower()]
    milliseconds = value * _UNIT_MILLISECONDS[unit]

    if milliseconds <= 0:
        raise InvalidConfiguration(f"Timespan must be positive: {timespan!r}")

    try:
        return timedelta(milliseconds=milliseconds)
    except OverflowError as exc:
        raise InvalidConfiguration(f"Timespan too large: {timespan!r}") from exc


def resolve_window(
    timespan: str = DEFAULT_TIMESPAN,
    now: datetime | None = None,
    timezone_str: str = "UTC",
) -> DateWindow:
    """Resolve a relative timespan into a start/end date pair.

    ``now`` is moved into ``timezone_str`` and truncated to its calendar
    day; the start is that day minus the duration in whole days, rounded
    half-up ("36h" goes back 2 days, "11h" stays on today).

    Parameters
    ----------
    timespan
        Duration expression
    now
        Reference time (default: current UTC time; naive values are UTC)
    timezone_str
        IANA timezone name for day truncation

    Returns
    -------
    DateWindow
        Resolved window

    Raises
    ------
    InvalidConfiguration
        If the timespan or timezone is invalid
    """
    duration = parse_timespan(timespan)

    try:
        tz = pytz.timezone(timezone_str)
    except pytz.UnknownTimeZoneError as exc:
        raise InvalidConfiguration(f"Invalid timezone: {timezone_str}") from exc

    local_now = ensure_utc(now or get_current_utc()).astimezone(tz)
    end_date = local_now.date()

    days_back = math.floor(duration / timedelta(days=1) + 0.5)
    try:
        start_date = end_date - timedelta(days=days_back)
    except OverflowError as exc:
        raise InvalidConfiguration(f"Timespan reaches before year 1: {timespan!r}") from exc

    return DateWindow(
        start_date=start_date,
        end_date=end_date,
        timespan=timespan,
        timezone=timezone_str,
    )
