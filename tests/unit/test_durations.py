"""Tests for duration breakdown and humanized text."""

import pytest

from wakasource.core.errors import InvalidConfiguration
from wakasource.rollups.durations import DurationFields, check_locale, describe_duration, humanize_duration


class TestDigital:
    """Zero-padded clock text and components."""

    def test_hour_and_a_half(self):
        fields = describe_duration(5400)

        assert fields == DurationFields(digital="01:30:00", hours=1, minutes=30, seconds=0, text="2 hours")

    def test_seconds_component(self):
        fields = describe_duration(3725)

        assert fields.digital == "01:02:05"
        assert (fields.hours, fields.minutes, fields.seconds) == (1, 2, 5)

    def test_fractional_seconds_are_truncated(self):
        assert describe_duration(59.9).digital == "00:00:59"

    def test_hours_are_bounded_by_the_day(self):
        """A total over one day keeps only the hour-of-day in digital."""
        fields = describe_duration(90000)

        assert fields.hours == 1
        assert fields.digital == "01:00:00"
        assert fields.text == "1 day"

    def test_zero(self):
        fields = describe_duration(0)

        assert fields.digital == "00:00:00"
        assert (fields.hours, fields.minutes, fields.seconds) == (0, 0, 0)
        assert fields.text


class TestText:
    """Humanized text rounds to the nearest unit."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0 seconds"),
            (30, "30 seconds"),
            (60, "1 minute"),
            (89, "1 minute"),
            (90, "2 minutes"),
            (600, "10 minutes"),
            (2700, "1 hour"),
            (5400, "2 hours"),
            (7140, "2 hours"),
            (7200, "2 hours"),
            (21 * 3600, "21 hours"),
            (22 * 3600, "1 day"),
            (36 * 3600, "2 days"),
            (259200, "3 days"),
            (14 * 86400, "14 days"),
            (26 * 86400, "1 month"),
            (400 * 86400, "1 year"),
        ],
    )
    def test_english(self, seconds, expected):
        assert humanize_duration(seconds) == expected

    def test_describe_uses_humanized_text(self):
        assert describe_duration(2700).text == "1 hour"

    def test_locale(self):
        english = describe_duration(7200, locale="en").text
        german = describe_duration(7200, locale="de").text

        assert german != english
        assert german.startswith("2")


class TestLocale:
    """Unknown locales are configuration errors."""

    def test_known_locale(self):
        assert check_locale("fr") is not None

    def test_unknown_locale(self):
        with pytest.raises(InvalidConfiguration, match="Invalid locale"):
            check_locale("klingon")

    def test_humanize_rejects_unknown_locale(self):
        with pytest.raises(InvalidConfiguration):
            humanize_duration(60, locale="klingon")
