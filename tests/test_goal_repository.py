"""Tests for the SQLite goal and catalog repositories."""

import threading
from datetime import date, datetime

import pytest

from goal_tracker.db.repositories import ProgramRepository, SQLiteGoalRepository
from goal_tracker.exceptions import GoalNotFoundError, WorkoutAlreadyCompletedError
from goal_tracker.models.goals import CompletionResult, GoalStatus
from goal_tracker.models.workouts import Program, ProgramWorkout


COMPLETED_AT = datetime(2024, 1, 20, 18, 0)


class TestSQLiteGoalRepository:
    """Tests for SQLiteGoalRepository."""

    def test_save_and_get_round_trip(self, goal_repository, make_goal):
        goal = make_goal(description="Two weeks of strength", custom_workout_ids=("workout_0",))
        goal_repository.save(goal)

        assert goal_repository.get(goal.id) == goal

    def test_round_trip_keeps_completion_data(self, goal_repository, make_goal):
        goal = make_goal()
        goal_repository.save(goal)
        result = CompletionResult(calories_burned=300, duration_minutes=45, difficulty="just_right", enjoyment=5)
        updated = goal_repository.record_completion(goal.id, "2024-01-03", result, completed_at=COMPLETED_AT)

        loaded = goal_repository.get(goal.id)
        assert loaded == updated
        assert loaded.schedule["2024-01-03"].calories_burned == 300
        assert loaded.achievements[0].description == "First workout completed!"

    def test_get_missing(self, goal_repository):
        assert goal_repository.get("goal_missing") is None

    def test_load_returns_only_the_users_goals(self, goal_repository, make_goal):
        mine = [
            make_goal(created_at=datetime(2023, 12, 2)),
            make_goal(created_at=datetime(2023, 12, 1)),
        ]
        theirs = make_goal(user_id="user_2")
        for goal in mine + [theirs]:
            goal_repository.save(goal)

        loaded = goal_repository.load("user_1")

        assert [g.id for g in loaded] == [mine[1].id, mine[0].id]
        assert goal_repository.load("nobody") == []

    def test_get_all_filters_and_orders_newest_first(self, goal_repository, make_goal):
        older = make_goal(created_at=datetime(2023, 12, 1))
        newer = make_goal(created_at=datetime(2023, 12, 5))
        paused = make_goal(created_at=datetime(2023, 12, 3), status=GoalStatus.PAUSED)
        for goal in (older, newer, paused):
            goal_repository.save(goal)

        assert [g.id for g in goal_repository.get_all(user_id="user_1")] == [newer.id, paused.id, older.id]
        assert [g.id for g in goal_repository.get_all(user_id="user_1", status=GoalStatus.PAUSED)] == [paused.id]
        assert goal_repository.count(user_id="user_1") == 3
        assert goal_repository.count(user_id="user_1", status="active") == 2

    def test_get_all_paginates(self, goal_repository, make_goal):
        for day in range(1, 6):
            goal_repository.save(make_goal(created_at=datetime(2023, 12, day)))

        page = goal_repository.get_all(limit=2, offset=2, user_id="user_1")
        assert len(page) == 2

    def test_save_replaces(self, goal_repository, make_goal):
        goal = make_goal()
        goal_repository.save(goal)
        goal_repository.save(make_goal(id=goal.id, title="Renamed"))

        assert goal_repository.get(goal.id).title == "Renamed"
        assert goal_repository.count() == 1

    def test_delete(self, goal_repository, make_goal):
        goal = goal_repository.save(make_goal())

        assert goal_repository.exists(goal.id)
        assert goal_repository.delete(goal.id) is True
        assert goal_repository.delete(goal.id) is False
        assert not goal_repository.exists(goal.id)

    def test_record_completion_unknown_goal(self, goal_repository):
        with pytest.raises(GoalNotFoundError):
            goal_repository.record_completion("goal_missing", date(2024, 1, 1))

    def test_failed_completion_leaves_goal_unchanged(self, goal_repository, make_goal):
        goal = goal_repository.save(make_goal())
        stored = goal_repository.record_completion(goal.id, date(2024, 1, 1), completed_at=COMPLETED_AT)

        with pytest.raises(WorkoutAlreadyCompletedError):
            goal_repository.record_completion(goal.id, date(2024, 1, 1))

        assert goal_repository.get(goal.id) == stored

    def test_concurrent_completions_are_both_kept(self, db_path, make_goal):
        """Completions on different dates from separate connections are all kept."""
        goal = make_goal(pool_size=5)
        SQLiteGoalRepository(db_path).save(goal)
        dates = sorted(goal.schedule)[:6]
        errors = []

        def complete(day):
            try:
                SQLiteGoalRepository(db_path).record_completion(goal.id, day, completed_at=COMPLETED_AT)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=complete, args=(day,)) for day in dates]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        stored = SQLiteGoalRepository(db_path).get(goal.id)
        assert sorted(k for k, e in stored.schedule.items() if e.completed) == dates


class TestWorkoutRepository:
    """Tests for WorkoutRepository."""

    def test_save_and_get(self, workout_repository, stored_workouts):
        loaded = workout_repository.get(stored_workouts[0].id)

        assert loaded.name == "Workout 0"
        assert loaded.estimated_duration_min == 30
        assert loaded.created_at == stored_workouts[0].created_at

    def test_get_many_skips_unknown(self, workout_repository, stored_workouts):
        found = workout_repository.get_many(["workout_0", "workout_2", "missing"])
        assert set(found) == {"workout_0", "workout_2"}

    def test_get_many_empty(self, workout_repository):
        assert workout_repository.get_many([]) == {}

    def test_get_all_and_count(self, workout_repository, stored_workouts):
        assert [w.id for w in workout_repository.get_all()] == ["workout_0", "workout_1", "workout_2"]
        assert workout_repository.count(active_only=True) == 3
        assert workout_repository.count(type="cardio") == 0


class TestProgramRepository:
    """Tests for ProgramRepository."""

    def test_save_and_get(self, program_repository: ProgramRepository):
        program = Program(
            id="program_1",
            name="Foundations",
            workouts=[
                ProgramWorkout(workout_id="workout_1", day_of_week=3),
                ProgramWorkout(workout_id="workout_0", day_of_week=1),
            ],
            category="strength",
            created_at=datetime(2024, 1, 1),
        )
        program_repository.save(program)

        loaded = program_repository.get("program_1")
        assert loaded.ordered_workout_ids == ["workout_0", "workout_1"]
        assert loaded.category == "strength"

    def test_filters(self, program_repository):
        program_repository.save(Program(id="p1", name="A", workouts=[ProgramWorkout("w")], category="strength"))
        program_repository.save(Program(id="p2", name="B", workouts=[ProgramWorkout("w")], category="cardio"))

        assert [p.id for p in program_repository.get_all(category="cardio")] == ["p2"]
        assert program_repository.count(category="strength") == 1
        assert program_repository.count() == 2
