"""
Dashboard Statistics

Per-user summary over a set of goals: the goal in progress on a reference
date, how its current week is going, and totals across every goal.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..models.goals import Goal, GoalStatus
from ..utils.dates import to_date
from .calendar import SUNDAY
from .progress import ProgressSnapshot, WeekProgress, compute_progress, compute_week_progress


# Goals in these states are never picked as the current goal
INACTIVE_STATUSES = frozenset({GoalStatus.PAUSED, GoalStatus.CANCELLED})


@dataclass
class CurrentGoalSummary:
    """The slice of the current goal a dashboard displays."""

    id: str
    title: str
    type: str
    status: str
    progress: ProgressSnapshot
    days_remaining: int
    week_progress: WeekProgress

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "status": self.status,
            "progress": self.progress.to_dict(),
            "days_remaining": self.days_remaining,
            "week_progress": self.week_progress.to_dict(),
        }


@dataclass
class DashboardStats:
    """Complete dashboard for one user on one reference date."""

    reference_date: date
    total_goals: int
    completed_goals: int
    total_workouts_completed: int
    week_progress: WeekProgress = field(default_factory=WeekProgress)
    current_goal: Optional[CurrentGoalSummary] = None

    def stats_dict(self) -> Dict[str, Any]:
        """The totals block of the dashboard."""
        return {
            "total_goals": self.total_goals,
            "completed_goals": self.completed_goals,
            "total_workouts_completed": self.total_workouts_completed,
            "week_progress": self.week_progress.to_dict(),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "reference_date": self.reference_date.isoformat(),
            "current_goal": self.current_goal.to_dict() if self.current_goal else None,
            "stats": self.stats_dict(),
        }


def _current_goal_key(goal: Goal):
    return (goal.start_date, goal.created_at, goal.id)


def select_current_goal(goals: Iterable[Goal], reference_date: Any) -> Optional[Goal]:
    """
    The goal in progress on reference_date, or None.

    Candidates are goals that are not paused or cancelled and whose date range
    contains reference_date. Among several, the one that started latest wins,
    then the most recently created, then the greatest id, so the choice never
    depends on input order.
    """
    reference = to_date(reference_date)
    candidates = [
        goal for goal in goals
        if goal.status not in INACTIVE_STATUSES and goal.contains(reference)
    ]
    if not candidates:
        return None
    return max(candidates, key=_current_goal_key)


def compute_dashboard(
    goals: Iterable[Goal],
    reference_date: Any,
    week_start_day: int = SUNDAY,
) -> DashboardStats:
    """
    Compute dashboard statistics for a user's goals.

    Args:
        goals: Every goal the user owns
        reference_date: Day the dashboard is viewed for
        week_start_day: First day of the week (0 = Monday, 6 = Sunday)

    Returns:
        DashboardStats; without a current goal the week progress is zeroed
    """
    reference = to_date(reference_date)
    goals = list(goals)

    completed_goals = 0
    total_workouts_completed = 0
    for goal in goals:
        snapshot = compute_progress(goal.schedule)
        total_workouts_completed += snapshot.completed_workouts
        if snapshot.completion_percentage == 100:
            completed_goals += 1

    stats = DashboardStats(
        reference_date=reference,
        total_goals=len(goals),
        completed_goals=completed_goals,
        total_workouts_completed=total_workouts_completed,
    )

    current = select_current_goal(goals, reference)
    if current is None:
        return stats

    week_progress = compute_week_progress(current.schedule, reference, week_start_day)
    stats.week_progress = week_progress
    stats.current_goal = CurrentGoalSummary(
        id=current.id,
        title=current.title,
        type=current.type.value,
        status=current.status.value,
        progress=compute_progress(current.schedule),
        days_remaining=current.days_remaining(reference),
        week_progress=week_progress,
    )
    return stats


def summarize_goals(goals: Iterable[Goal]) -> List[Dict[str, Any]]:
    """One line per goal with its progress, for listings."""
    return [
        {
            "id": goal.id,
            "title": goal.title,
            "status": goal.status.value,
            "start_date": goal.start_date.isoformat(),
            "end_date": goal.end_date.isoformat(),
            "progress": compute_progress(goal.schedule).to_dict(),
        }
        for goal in goals
    ]
