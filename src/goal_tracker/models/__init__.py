"""Domain models for goals, the workout catalog and fitness profiles."""

from .goals import (
    Achievement,
    AchievementType,
    CompletionResult,
    Goal,
    GoalStatus,
    GoalTargets,
    GoalType,
    PerceivedDifficulty,
    Priority,
    Schedule,
    ScheduleEntry,
    schedule_from_list,
    schedule_to_list,
)
from .profile import ActivityLevel, FitnessLevel, FitnessProfile
from .workouts import Difficulty, Program, ProgramWorkout, Workout, WorkoutRef, WorkoutType

__all__ = [
    # Goals
    "Achievement",
    "AchievementType",
    "CompletionResult",
    "Goal",
    "GoalStatus",
    "GoalTargets",
    "GoalType",
    "PerceivedDifficulty",
    "Priority",
    "Schedule",
    "ScheduleEntry",
    "schedule_from_list",
    "schedule_to_list",
    # Profile
    "ActivityLevel",
    "FitnessLevel",
    "FitnessProfile",
    # Catalog
    "Difficulty",
    "Program",
    "ProgramWorkout",
    "Workout",
    "WorkoutRef",
    "WorkoutType",
]
