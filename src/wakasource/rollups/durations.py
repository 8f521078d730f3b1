"""Duration breakdown for compounded totals."""

from __future__ import annotations

import math
from dataclasses import dataclass

import pendulum
from pendulum.locales.locale import Locale

from ..core.errors import InvalidConfiguration

__all__ = ["DurationFields", "check_locale", "describe_duration", "humanize_duration"]

_SECONDS_PER_UNIT = {
    "second": 1,
    "minute": 60,
    "hour": 60 * 60,
    "day": 24 * 60 * 60,
    "month": 365 * 24 * 60 * 60 / 12,
    "year": 365 * 24 * 60 * 60,
}

# (unit shown, largest rounded value, unit the value is measured in).
# When the two units differ the text reads as a single unit ("1 hour" for 45 minutes).
_HUMANIZE_THRESHOLDS = (
    ("second", 44, "second"),
    ("minute", 89, "second"),
    ("minute", 44, "minute"),
    ("hour", 89, "minute"),
    ("hour", 21, "hour"),
    ("day", 35, "hour"),
    ("day", 25, "day"),
    ("month", 45, "day"),
    ("month", 10, "month"),
    ("year", 17, "month"),
    ("year", None, "year"),
)


@dataclass(frozen=True)
class DurationFields:
    """Derived display fields for a number of seconds.

    ``hours`` is the hour-of-day component (0-23), matching ``digital``;
    whole days are only reflected in ``text``.
    """

    digital: str
    hours: int
    minutes: int
    seconds: int
    text: str


def check_locale(locale: str) -> Locale:
    """Load a locale, raising InvalidConfiguration if pendulum has no data for it."""
    try:
        return Locale.load(locale)
    except (ValueError, ImportError) as exc:
        raise InvalidConfiguration(f"Invalid locale: {locale}") from exc


def _nearest_unit(total_seconds: float) -> tuple[str, int]:
    for unit, limit, measured in _HUMANIZE_THRESHOLDS:
        value = math.floor(total_seconds / _SECONDS_PER_UNIT[measured] + 0.5)
        if limit is None or value <= limit:
            break
    return unit, value if unit == measured else 1


def humanize_duration(total_seconds: float, locale: str = "en") -> str:
    """Approximate a duration with its nearest unit.

    Values are rounded half-up, so 90 minutes reads "2 hours" and
    45 minutes reads "1 hour".

    Raises
    ------
    InvalidConfiguration
        If the locale is unknown
    """
    loaded = check_locale(locale)
    unit, count = _nearest_unit(total_seconds)
    return loaded.translation(f"units.{unit}.{loaded.plural(count)}").format(count)


def describe_duration(total_seconds: float, locale: str = "en") -> DurationFields:
    """Build digital clock text, component breakdown and humanized text.

    Examples
    --------
    >>> describe_duration(5400).digital
    '01:30:00'
    >>> describe_duration(5400).text
    '2 hours'
    """
    duration = pendulum.duration(seconds=total_seconds)

    hours = duration.hours
    minutes = duration.minutes
    seconds = duration.remaining_seconds

    return DurationFields(
        digital=f"{hours:02d}:{minutes:02d}:{seconds:02d}",
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        text=humanize_duration(total_seconds, locale=locale),
    )
