"""Unit tests for relative and elapsed time formatting."""

from datetime import datetime, timedelta, timezone

import pytest

from bakeops.domain.service.time_format import (
    format_elapsed,
    format_relative_time,
    format_stage_time,
)

JAN_1 = 1735689600000  # 2025-01-01T00:00:00Z
SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class TestRelativeTime:

    @pytest.mark.parametrize(
        "age, expected",
        [
            (0, "just now"),
            (59 * SECOND, "just now"),
            (MINUTE, "1 min ago"),
            (59 * MINUTE, "59 min ago"),
            (HOUR, "1 hour ago"),
            (5 * HOUR, "5 hours ago"),
            (DAY, "1 day ago"),
            (6 * DAY, "6 days ago"),
        ],
    )
    def test_recent(self, age, expected):
        assert format_relative_time(JAN_1, JAN_1 + age) == expected

    def test_older_than_a_week_shows_date(self):
        assert format_relative_time(JAN_1, JAN_1 + 8 * DAY) == "Jan 1"

    def test_older_than_a_year_shows_year(self):
        assert format_relative_time(JAN_1, JAN_1 + 400 * DAY) == "Jan 1, 2025"

    def test_future_timestamp_reads_as_just_now(self):
        assert format_relative_time(JAN_1 + MINUTE, JAN_1) == "just now"


class TestElapsed:

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=0), "0s"),
            (timedelta(seconds=42), "42s"),
            (timedelta(seconds=60), "1m 0s"),
            (timedelta(seconds=125), "2m 5s"),
            (timedelta(hours=3), "3h"),
            (timedelta(hours=3, minutes=12, seconds=9), "3h 12m"),
            (timedelta(days=2), "2d"),
            (timedelta(days=1, hours=4, minutes=30), "1d 4h"),
        ],
    )
    def test_two_largest_units(self, delta, expected):
        assert format_elapsed(delta) == expected

    def test_negative_floors_to_zero(self):
        assert format_elapsed(timedelta(seconds=-30)) == "0s"


class TestStageTime:

    def test_absent(self):
        assert format_stage_time(None) == "Not yet"

    def test_formatted(self):
        value = datetime(2025, 1, 1, 10, 26, 40, tzinfo=timezone.utc)
        assert format_stage_time(value) == "Jan 01, 2025, 10:26 AM"

    def test_display_zone(self):
        value = datetime(2025, 1, 1, 10, 0, tzinfo=timezone.utc)
        ist = timezone(timedelta(hours=5, minutes=30))
        assert format_stage_time(value, ist) == "Jan 01, 2025, 03:30 PM"
