"""
Schedule generation

Distributes a workout pool over a goal's date range. The cadence is derived
from the pool size (capped at five sessions a week), candidate days are
spaced evenly, and any candidate landing on a weekend is dropped rather than
moved to the next weekday.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union

from ..exceptions import WorkoutNotFoundError
from ..models.goals import Schedule, ScheduleEntry, schedule_from_list, schedule_to_list
from ..models.workouts import Program, Workout, WorkoutRef
from .calendar import iter_days

logger = logging.getLogger(__name__)


MAX_WORKOUTS_PER_WEEK = 5

PoolItem = Union[Workout, WorkoutRef]


def workouts_per_week(pool_size: int) -> int:
    """Weekly cadence implied by a pool of the given size."""
    return min(pool_size, MAX_WORKOUTS_PER_WEEK)


def step_days_for(pool_size: int) -> int:
    """Days between candidate workout dates; 0 for an empty pool."""
    per_week = workouts_per_week(pool_size)
    if per_week == 0:
        return 0
    return 7 // per_week


def _as_ref(item: PoolItem) -> WorkoutRef:
    if isinstance(item, WorkoutRef):
        return item
    return WorkoutRef.from_workout(item)


def generate_schedule(workout_pool: Sequence[PoolItem], start: Any, end: Any) -> Schedule:
    """
    Assign workouts from the pool to dates between start and end.

    The i-th emitted date receives workout_pool[i % len(workout_pool)], so a
    pool shorter than the range is reused cyclically. Weekend dates are never
    scheduled.

    Args:
        workout_pool: Ordered workouts to distribute
        start: First day of the range (inclusive)
        end: Last day of the range (inclusive)

    Returns:
        Map of ISO date to pending ScheduleEntry; empty when the pool is empty
        or no candidate date falls on a weekday.

    Raises:
        InvalidRangeError: end is before start
    """
    pool = [_as_ref(w) for w in workout_pool]

    if not pool:
        # Still reject a reversed range
        iter_days(start, end)
        return {}

    days = iter_days(start, end, exclude_weekends=True, step_days=step_days_for(len(pool)))

    schedule: Schedule = {}
    for index, day in enumerate(days):
        entry = ScheduleEntry(workout=pool[index % len(pool)], scheduled_date=day)
        schedule[entry.date_key] = entry

    logger.debug(f"Generated {len(schedule)} entries from a pool of {len(pool)} workouts")
    return schedule


def resolve_workout_pool(
    catalog: Mapping[str, Workout],
    program: Optional[Program] = None,
    custom_workout_ids: Iterable[str] = (),
) -> List[Workout]:
    """
    Build the ordered workout pool for a goal's workout source.

    A program contributes its workouts ordered by week, day and position;
    otherwise the custom ids are used in the order given.

    Raises:
        WorkoutNotFoundError: an id is missing from the catalog
    """
    if program is not None:
        workout_ids = program.ordered_workout_ids
    else:
        workout_ids = list(custom_workout_ids)

    pool = []
    for workout_id in workout_ids:
        workout = catalog.get(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        pool.append(workout)
    return pool


__all__ = [
    "MAX_WORKOUTS_PER_WEEK",
    "workouts_per_week",
    "step_days_for",
    "generate_schedule",
    "resolve_workout_pool",
    "schedule_to_list",
    "schedule_from_list",
]
