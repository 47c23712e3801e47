"""
Progress aggregation

Completion percentage, counts, calories and duration derived from a goal's
schedule, plus the single operation that changes completion state.
"""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from ..exceptions import ScheduleEntryNotFoundError, WorkoutAlreadyCompletedError
from ..models.goals import CompletionResult, Goal, GoalStatus, ScheduleEntry
from ..utils.dates import to_date
from .achievements import detect_achievements
from .calendar import SUNDAY, iter_days, week_bounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressSnapshot:
    """Aggregated completion state of a schedule."""

    completion_percentage: int
    completed_workouts: int
    total_workouts: int
    total_calories_burned: float
    total_duration: float

    @property
    def is_complete(self) -> bool:
        return self.total_workouts > 0 and self.completion_percentage == 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completion_percentage": self.completion_percentage,
            "completed_workouts": self.completed_workouts,
            "total_workouts": self.total_workouts,
            "total_calories_burned": self.total_calories_burned,
            "total_duration": self.total_duration,
        }


@dataclass(frozen=True)
class WeekProgress:
    """Completion of the scheduled workouts in one calendar week."""

    completed: int = 0
    total: int = 0
    percentage: int = 0

    @classmethod
    def from_snapshot(cls, snapshot: ProgressSnapshot) -> "WeekProgress":
        return cls(
            completed=snapshot.completed_workouts,
            total=snapshot.total_workouts,
            percentage=snapshot.completion_percentage,
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "completed": self.completed,
            "total": self.total,
            "percentage": self.percentage,
        }


def completion_percentage(completed: int, total: int) -> int:
    """
    Rounded share of completed workouts, 0 for an empty schedule.

    Halves round up, so 199 of 200 already reports 100.
    """
    if total <= 0:
        return 0
    percentage = int(math.floor(100 * completed / total + 0.5))
    return max(0, min(100, percentage))


def compute_progress(schedule: Mapping[str, ScheduleEntry]) -> ProgressSnapshot:
    """
    Aggregate a schedule into a progress snapshot.

    Completed entries without calorie or duration data contribute zero.
    """
    total = len(schedule)
    completed = 0
    calories = 0.0
    duration = 0.0

    for entry in schedule.values():
        if not entry.completed:
            continue
        completed += 1
        calories += entry.calories_burned or 0
        duration += entry.duration_minutes or 0

    return ProgressSnapshot(
        completion_percentage=completion_percentage(completed, total),
        completed_workouts=completed,
        total_workouts=total,
        total_calories_burned=calories,
        total_duration=duration,
    )


def compute_week_progress(
    schedule: Mapping[str, ScheduleEntry],
    reference_date: Any,
    week_start_day: int = SUNDAY,
) -> WeekProgress:
    """Progress over the entries scheduled in the week containing reference_date."""
    week_start, week_end = week_bounds(reference_date, week_start_day)
    week_entries = {
        day.isoformat(): schedule[day.isoformat()]
        for day in iter_days(week_start, week_end)
        if day.isoformat() in schedule
    }
    return WeekProgress.from_snapshot(compute_progress(week_entries))


def record_completion(
    goal: Goal,
    scheduled_date: Any,
    result: Optional[CompletionResult] = None,
    completed_at: Optional[datetime] = None,
) -> Goal:
    """
    Mark the workout scheduled on scheduled_date as completed.

    Returns a new Goal; the input goal is left untouched. Milestone
    achievements are appended, and the goal's status becomes completed once
    the completion percentage reaches 100.

    Raises:
        ScheduleEntryNotFoundError: nothing is scheduled on that date
        WorkoutAlreadyCompletedError: the entry was already completed
    """
    key = to_date(scheduled_date).isoformat()
    entry = goal.schedule.get(key)
    if entry is None:
        raise ScheduleEntryNotFoundError(goal.id, key)
    if entry.completed:
        raise WorkoutAlreadyCompletedError(goal.id, key)

    completed_at = completed_at or datetime.now()
    schedule = dict(goal.schedule)
    schedule[key] = entry.mark_completed(result or CompletionResult(), completed_at)

    updated = replace(goal, schedule=schedule, updated_at=completed_at)
    snapshot = compute_progress(schedule)

    earned = detect_achievements(
        updated,
        snapshot.completed_workouts,
        goal_completed=snapshot.is_complete,
        earned_at=completed_at,
    )
    status = GoalStatus.COMPLETED if snapshot.is_complete else goal.status

    if earned:
        logger.info(f"Goal {goal.id} earned: {', '.join(a.description for a in earned)}")

    return replace(
        updated,
        achievements=goal.achievements + tuple(earned),
        status=status,
    )


def goal_progress(goal: Goal, reference_date: Optional[date] = None, week_start_day: int = SUNDAY) -> Dict[str, Any]:
    """Overall and current-week progress for one goal, ready for serialization."""
    reference = reference_date or date.today()
    return {
        "goal_id": goal.id,
        "progress": compute_progress(goal.schedule).to_dict(),
        "week_progress": compute_week_progress(goal.schedule, reference, week_start_day).to_dict(),
        "days_remaining": goal.days_remaining(reference),
        "status": goal.status.value,
        "achievements": [a.to_dict() for a in goal.achievements],
    }
