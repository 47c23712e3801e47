"""
Goal scheduling and progress engine.

Pure functions over explicit inputs: schedule generation, progress
aggregation, realism scoring and dashboard statistics. Nothing in this
package touches storage.
"""

from .calendar import DayRange, iter_days, week_bounds
from .schedule import (
    generate_schedule,
    resolve_workout_pool,
    schedule_from_list,
    schedule_to_list,
    workouts_per_week,
)
from .progress import (
    ProgressSnapshot,
    WeekProgress,
    compute_progress,
    compute_week_progress,
    goal_progress,
    record_completion,
)
from .realism import (
    REALISM_PASSING_SCORE,
    GoalParameters,
    RealismVerdict,
    check_realism,
)
from .dashboard import (
    CurrentGoalSummary,
    DashboardStats,
    compute_dashboard,
    select_current_goal,
    summarize_goals,
)
from .achievements import detect_achievements

__all__ = [
    # Calendar
    "DayRange",
    "iter_days",
    "week_bounds",
    # Schedule
    "generate_schedule",
    "resolve_workout_pool",
    "schedule_from_list",
    "schedule_to_list",
    "workouts_per_week",
    # Progress
    "ProgressSnapshot",
    "WeekProgress",
    "compute_progress",
    "compute_week_progress",
    "goal_progress",
    "record_completion",
    # Realism
    "REALISM_PASSING_SCORE",
    "GoalParameters",
    "RealismVerdict",
    "check_realism",
    # Dashboard
    "CurrentGoalSummary",
    "DashboardStats",
    "compute_dashboard",
    "select_current_goal",
    "summarize_goals",
    # Achievements
    "detect_achievements",
]
