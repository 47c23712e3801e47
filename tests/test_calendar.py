"""Tests for calendar iteration."""

import pytest
from datetime import date, datetime

from goal_tracker.engine.calendar import DayRange, is_weekend, iter_days, week_bounds
from goal_tracker.exceptions import ErrorCode, InvalidRangeError, ValidationError


class TestIterDays:
    """Tests for iter_days."""

    def test_includes_start_and_end(self, monday):
        """Both endpoints are part of an all-days range."""
        days = list(iter_days(monday, date(2024, 1, 7)))

        assert days[0] == monday
        assert days[-1] == date(2024, 1, 7)
        assert len(days) == 7

    def test_single_day_range(self, monday):
        assert list(iter_days(monday, monday)) == [monday]

    def test_excludes_weekends(self, monday):
        """Two weeks from a Monday hold ten weekdays."""
        days = list(iter_days(monday, date(2024, 1, 14), exclude_weekends=True))

        assert len(days) == 10
        assert all(not is_weekend(d) for d in days)

    def test_end_on_weekend_is_dropped(self, monday):
        days = list(iter_days(monday, date(2024, 1, 6), exclude_weekends=True))
        assert days[-1] == date(2024, 1, 5)

    def test_weekend_only_range_is_empty(self):
        saturday = date(2024, 1, 6)
        assert list(iter_days(saturday, date(2024, 1, 7), exclude_weekends=True)) == []

    def test_step_days(self, monday):
        """Stepping walks from start without adjusting for weekends."""
        days = list(iter_days(monday, date(2024, 1, 14), step_days=3))
        assert days == [
            date(2024, 1, 1),
            date(2024, 1, 4),
            date(2024, 1, 7),
            date(2024, 1, 10),
            date(2024, 1, 13),
        ]

    def test_accepts_strings_and_datetimes(self):
        """Time of day is ignored."""
        days = list(iter_days("2024-01-01T18:30:00", datetime(2024, 1, 3, 6, 0)))
        assert days == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]

    def test_range_is_restartable(self, monday):
        """Each iteration starts over and yields the same days."""
        days = iter_days(monday, date(2024, 1, 10), exclude_weekends=True)

        assert isinstance(days, DayRange)
        assert list(days) == list(days)
        assert len(list(days)) == 8

    def test_end_before_start_raises(self, monday):
        with pytest.raises(InvalidRangeError) as exc_info:
            iter_days(monday, date(2023, 12, 31))

        assert exc_info.value.code == ErrorCode.INVALID_RANGE
        assert exc_info.value.status_code == 400

    def test_step_must_be_positive(self, monday):
        with pytest.raises(ValidationError):
            iter_days(monday, date(2024, 1, 5), step_days=0)


class TestWeekBounds:
    """Tests for week_bounds."""

    def test_sunday_start(self):
        start, end = week_bounds(date(2024, 1, 3), week_start_day=6)
        assert start == date(2023, 12, 31)
        assert end == date(2024, 1, 6)

    def test_monday_start(self):
        start, end = week_bounds(date(2024, 1, 3), week_start_day=0)
        assert start == date(2024, 1, 1)
        assert end == date(2024, 1, 7)

    def test_reference_on_week_start(self):
        start, end = week_bounds(date(2023, 12, 31), week_start_day=6)
        assert start == date(2023, 12, 31)
        assert end == date(2024, 1, 6)

    def test_invalid_week_start_day(self):
        with pytest.raises(ValidationError):
            week_bounds(date(2024, 1, 3), week_start_day=7)
