"""Pytest configuration and fixtures."""

from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient

from goal_tracker.api.deps import get_catalog_service, get_goal_service
from goal_tracker.config import Settings, get_settings
from goal_tracker.db.repositories import ProgramRepository, SQLiteGoalRepository, WorkoutRepository
from goal_tracker.engine.schedule import generate_schedule
from goal_tracker.main import app
from goal_tracker.models.goals import Goal, GoalType
from goal_tracker.models.workouts import Difficulty, Workout, WorkoutType
from goal_tracker.services.catalog_service import CatalogService
from goal_tracker.services.goal_service import GoalService


# 2024-01-01 is a Monday
MONDAY = date(2024, 1, 1)


def make_workout(index: int, duration: int = 30, type: WorkoutType = WorkoutType.STRENGTH) -> Workout:
    return Workout(
        id=f"workout_{index}",
        name=f"Workout {index}",
        type=type,
        difficulty=Difficulty.BEGINNER,
        estimated_duration_min=duration,
        calories_burned=200.0,
        created_at=datetime(2024, 1, 1, 8, 0),
    )


@pytest.fixture
def monday():
    """A Monday to anchor date ranges on."""
    return MONDAY


@pytest.fixture
def workout_pool():
    """Factory for pools of n catalog workouts."""
    def _pool(n: int, duration: int = 30):
        return [make_workout(i, duration=duration) for i in range(n)]
    return _pool


@pytest.fixture
def make_goal():
    """Factory for goals with a generated schedule."""
    counter = {"n": 0}

    def _make(
        start: date = MONDAY,
        end: date = date(2024, 1, 14),
        pool_size: int = 3,
        **kwargs,
    ) -> Goal:
        counter["n"] += 1
        pool = [make_workout(i) for i in range(pool_size)]
        defaults = dict(
            id=f"goal_{counter['n']:03d}",
            user_id="user_1",
            title=f"Goal {counter['n']}",
            type=GoalType.CUSTOM,
            target_value=10,
            target_unit="sessions",
            start_date=start,
            end_date=end,
            schedule=generate_schedule(pool, start, end),
            created_at=datetime(2023, 12, 1, 12, 0),
        )
        defaults.update(kwargs)
        return Goal(**defaults)

    return _make


@pytest.fixture
def db_path(tmp_path):
    """Path to a fresh SQLite database."""
    return tmp_path / "goals.db"


@pytest.fixture
def goal_repository(db_path):
    return SQLiteGoalRepository(db_path)


@pytest.fixture
def workout_repository(db_path):
    return WorkoutRepository(db_path)


@pytest.fixture
def program_repository(db_path):
    return ProgramRepository(db_path)


@pytest.fixture
def catalog_service(workout_repository, program_repository):
    return CatalogService(workout_repository, program_repository)


@pytest.fixture
def goal_service(goal_repository, workout_repository, program_repository):
    return GoalService(goal_repository, workout_repository, program_repository)


@pytest.fixture
def stored_workouts(workout_repository):
    """Three workouts saved in the catalog."""
    workouts = [make_workout(i) for i in range(3)]
    for workout in workouts:
        workout_repository.save(workout)
    return workouts


@pytest.fixture
def client(db_path, goal_service, catalog_service):
    """API test client wired to the temporary database."""
    app.dependency_overrides[get_goal_service] = lambda: goal_service
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_settings] = lambda: Settings(_env_file=None, goals_db_path=db_path)
    yield TestClient(app)
    app.dependency_overrides.clear()
