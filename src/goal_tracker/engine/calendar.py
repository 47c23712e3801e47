"""
Calendar iteration

Day sequences between two dates, optionally skipping weekends and walking
in steps of more than one day. All comparisons happen at day granularity.
"""

from datetime import date, timedelta
from typing import Any, Iterator, Tuple

from ..exceptions import InvalidRangeError, ValidationError
from ..utils.dates import to_date


SATURDAY = 5
SUNDAY = 6
WEEKEND_DAYS = frozenset({SATURDAY, SUNDAY})


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


class DayRange:
    """
    A lazy, finite, restartable sequence of days.

    Every call to iter() walks again from the start, so the same range can be
    consumed any number of times and always yields the same days.
    """

    def __init__(
        self,
        start: date,
        end: date,
        exclude_weekends: bool = False,
        step_days: int = 1,
    ) -> None:
        self.start = start
        self.end = end
        self.exclude_weekends = exclude_weekends
        self.step_days = step_days

    def __iter__(self) -> Iterator[date]:
        step = timedelta(days=self.step_days)
        current = self.start
        while current <= self.end:
            if not (self.exclude_weekends and is_weekend(current)):
                yield current
            current += step

    def __repr__(self) -> str:
        return (
            f"DayRange(start={self.start.isoformat()}, end={self.end.isoformat()}, "
            f"exclude_weekends={self.exclude_weekends}, step_days={self.step_days})"
        )


def iter_days(
    start: Any,
    end: Any,
    exclude_weekends: bool = False,
    step_days: int = 1,
) -> DayRange:
    """
    Days from start to end inclusive.

    Args:
        start: First day (date, datetime or ISO string)
        end: Last day; included when the walk lands on it and it is not excluded
        exclude_weekends: Drop Saturdays and Sundays from the sequence
        step_days: Distance between consecutive candidate days

    Raises:
        InvalidRangeError: end is before start
        ValidationError: step_days is less than 1
    """
    start_day = to_date(start)
    end_day = to_date(end)

    if end_day < start_day:
        raise InvalidRangeError(start_day.isoformat(), end_day.isoformat())
    if step_days < 1:
        raise ValidationError(f"step_days must be at least 1, got {step_days}", field="step_days")

    return DayRange(start_day, end_day, exclude_weekends=exclude_weekends, step_days=step_days)


def week_bounds(reference: Any, week_start_day: int = SUNDAY) -> Tuple[date, date]:
    """
    First and last day of the week containing reference.

    week_start_day uses Python weekday numbering (0 = Monday, 6 = Sunday).
    """
    if not 0 <= week_start_day <= 6:
        raise ValidationError(
            f"week_start_day must be between 0 and 6, got {week_start_day}",
            field="week_start_day",
        )
    day = to_date(reference)
    offset = (day.weekday() - week_start_day) % 7
    week_start = day - timedelta(days=offset)
    return week_start, week_start + timedelta(days=6)
