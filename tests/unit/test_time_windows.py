"""Tests for timespan parsing and window resolution."""

from datetime import date, datetime, timedelta, timezone

import pytest

from wakasource.core.errors import InvalidConfiguration
from wakasource.rollups.time_windows import DEFAULT_TIMESPAN, DateWindow, parse_timespan, resolve_window

NOW = datetime(2025, 10, 8, 15, 30, tzinfo=timezone.utc)


def test_parse_day_expressions():
    """Days in the short and long spelling."""
    assert parse_timespan("7day") == timedelta(days=7)
    assert parse_timespan("7 days") == timedelta(days=7)
    assert parse_timespan("30d") == timedelta(days=30)
    assert parse_timespan("1.5h") == timedelta(hours=1, minutes=30)


def test_parse_unit_table():
    """Weeks, years and bare numbers."""
    assert parse_timespan("2w") == timedelta(days=14)
    assert parse_timespan("1y") == timedelta(days=365.25)
    assert parse_timespan("100") == timedelta(milliseconds=100)
    assert parse_timespan("90 mins") == timedelta(minutes=90)


@pytest.mark.parametrize("value", ["banana", "", "   ", "-7day", "0day", "7 fortnights", "7" * 101])
def test_parse_rejects_invalid(value):
    """Unparseable, empty and non-positive expressions."""
    with pytest.raises(InvalidConfiguration):
        parse_timespan(value)


def test_resolve_default_seven_days():
    window = resolve_window(DEFAULT_TIMESPAN, now=NOW)

    assert window.start == "2025-10-01"
    assert window.end == "2025-10-08"
    assert window.days == 8
    assert window.to_query_params() == {"start": "2025-10-01", "end": "2025-10-08"}


def test_resolve_thirty_days():
    window = resolve_window("30day", now=NOW)

    assert window.start == "2025-09-08"
    assert window.end == "2025-10-08"


def test_long_spelling_resolves_the_same():
    assert resolve_window("7 days", now=NOW) == DateWindow(
        start_date=date(2025, 10, 1),
        end_date=date(2025, 10, 8),
        timespan="7 days",
        timezone="UTC",
    )
    assert resolve_window("7 days", now=NOW).start == resolve_window("7day", now=NOW).start


def test_resolve_truncates_in_timezone():
    """02:00 UTC on the 8th is still the 7th in New York."""
    now = datetime(2025, 10, 8, 2, 0, tzinfo=timezone.utc)

    window = resolve_window("7day", now=now, timezone_str="America/New_York")

    assert window.end == "2025-10-07"
    assert window.start == "2025-09-30"
    assert window.timezone == "America/New_York"


def test_naive_now_is_utc():
    naive = datetime(2025, 10, 8, 15, 30)

    assert resolve_window("7day", now=naive) == resolve_window("7day", now=NOW)


def test_fractional_days_round_half_up():
    """36h goes back two days, 11h stays on today."""
    assert resolve_window("36h", now=NOW).start == "2025-10-06"
    assert resolve_window("12h", now=NOW).start == "2025-10-07"
    assert resolve_window("11h", now=NOW).start == "2025-10-08"


def test_invalid_timezone():
    with pytest.raises(InvalidConfiguration, match="Invalid timezone"):
        resolve_window("7day", now=NOW, timezone_str="Mars/Olympus")


def test_invalid_timespan():
    with pytest.raises(InvalidConfiguration):
        resolve_window("banana", now=NOW)


def test_window_before_year_one():
    with pytest.raises(InvalidConfiguration):
        resolve_window("9999y", now=NOW)


def test_uses_current_time_by_default():
    window = resolve_window("1day")

    assert window.days == 2
    assert window.timespan == "1day"
