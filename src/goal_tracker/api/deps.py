"""Dependency injection for API routes."""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from ..config import Settings, get_settings
from ..db.repositories import ProgramRepository, SQLiteGoalRepository, WorkoutRepository
from ..services.catalog_service import CatalogService
from ..services.goal_service import GoalService


@lru_cache
def get_goal_repository() -> SQLiteGoalRepository:
    """Get the goal repository instance."""
    return SQLiteGoalRepository(get_settings().goals_db_path)


@lru_cache
def get_workout_repository() -> WorkoutRepository:
    """Get the workout catalog repository instance."""
    return WorkoutRepository(get_settings().goals_db_path)


@lru_cache
def get_program_repository() -> ProgramRepository:
    """Get the program repository instance."""
    return ProgramRepository(get_settings().goals_db_path)


@lru_cache
def get_goal_service() -> GoalService:
    """Get the goal service instance."""
    return GoalService(
        goal_repository=get_goal_repository(),
        workout_repository=get_workout_repository(),
        program_repository=get_program_repository(),
        week_start_day=get_settings().week_start_day,
    )


@lru_cache
def get_catalog_service() -> CatalogService:
    """Get the catalog service instance."""
    return CatalogService(
        workout_repository=get_workout_repository(),
        program_repository=get_program_repository(),
    )


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, alias="X-User-Id"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Identify the caller.

    There is no authentication; the X-User-Id header names the user and
    falls back to the configured default.
    """
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return settings.default_user_id
