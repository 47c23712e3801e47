"""Milestone achievements earned while completing a goal's workouts."""

from datetime import datetime
from typing import List, Optional

from ..models.goals import Achievement, AchievementType, Goal


# Completed-workout counts that earn a milestone, with their descriptions
WORKOUT_MILESTONES = {
    1: "First workout completed!",
    5: "5 workouts completed!",
    10: "10 workouts completed!",
}

GOAL_COMPLETED = "Goal completed!"


def detect_achievements(
    goal: Goal,
    completed_count: int,
    goal_completed: bool = False,
    earned_at: Optional[datetime] = None,
) -> List[Achievement]:
    """
    New achievements for a goal that has completed_count finished workouts.

    goal_completed adds the "Goal completed!" milestone; it is set once the
    goal's completion percentage reaches 100.

    Achievements whose description the goal already carries are not repeated.
    """
    earned_at = earned_at or datetime.now()
    existing = {a.description for a in goal.achievements}
    earned: List[Achievement] = []

    description = WORKOUT_MILESTONES.get(completed_count)
    if description and description not in existing:
        earned.append(Achievement(
            type=AchievementType.MILESTONE,
            description=description,
            earned_at=earned_at,
            value={"count": completed_count},
        ))

    if goal_completed and GOAL_COMPLETED not in existing:
        earned.append(Achievement(
            type=AchievementType.MILESTONE,
            description=GOAL_COMPLETED,
            earned_at=earned_at,
            value={"goal_id": goal.id},
        ))

    return earned
