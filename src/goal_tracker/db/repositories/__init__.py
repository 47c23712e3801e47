"""Repository pattern implementations for database persistence.

This module provides a Repository pattern abstraction for data persistence,
enabling:
- Clean separation between the pure goal engine and data access
- Easy swapping of storage backends behind the GoalRepository interface
- Serialized read-modify-write for completion recording
"""

from .base import Repository, GoalRepository, SQLiteRepository
from .goal_repository import SQLiteGoalRepository
from .workout_repository import WorkoutRepository, ProgramRepository

__all__ = [
    # Base classes
    "Repository",
    "GoalRepository",
    "SQLiteRepository",
    # Goal storage
    "SQLiteGoalRepository",
    # Catalog storage
    "WorkoutRepository",
    "ProgramRepository",
]
