"""Tests for GoalService and CatalogService."""

from datetime import date, datetime

import pytest

from goal_tracker.exceptions import (
    ForbiddenError,
    GoalNotFoundError,
    GoalValidationError,
    InvalidRangeError,
    ProgramNotFoundError,
    ScheduleEntryNotFoundError,
    ValidationError,
    WorkoutAlreadyCompletedError,
    WorkoutNotFoundError,
)
from goal_tracker.models.goals import CompletionResult, GoalStatus, GoalType, Priority
from goal_tracker.models.profile import FitnessLevel, FitnessProfile
from goal_tracker.models.workouts import ProgramWorkout
from goal_tracker.services.base import PaginationParams
from goal_tracker.services.goal_service import derive_targets, validate_title


WORKOUT_IDS = ["workout_0", "workout_1", "workout_2"]


@pytest.fixture
def create_goal(goal_service, stored_workouts):
    """Create a two-week custom goal over the stored workouts."""
    def _create(**overrides):
        kwargs = dict(
            user_id="user_1",
            title="Two week block",
            type=GoalType.CUSTOM,
            target_value=10,
            target_unit="sessions",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 14),
            custom_workout_ids=WORKOUT_IDS,
        )
        kwargs.update(overrides)
        return goal_service.create_goal(**kwargs)
    return _create


class TestHelpers:
    """Tests for title validation and target derivation."""

    def test_title_is_stripped(self):
        assert validate_title("  Spring base  ") == "Spring base"

    @pytest.mark.parametrize("title", ["", "A", " B ", "x" * 101])
    def test_title_length(self, title):
        with pytest.raises(GoalValidationError):
            validate_title(title)

    def test_derive_targets_from_schedule(self, make_goal):
        goal = make_goal()
        targets = derive_targets(goal.schedule, goal.start_date, goal.end_date)

        assert targets.total_workouts == 5
        assert targets.workouts_per_week == 3

    def test_supplied_targets_win(self, make_goal):
        goal = make_goal()
        targets = derive_targets(
            goal.schedule, goal.start_date, goal.end_date,
            {"workouts_per_week": 2, "total_calories": 5000, "total_duration": None},
        )

        assert targets.workouts_per_week == 2
        assert targets.total_workouts == 5
        assert targets.total_calories == 5000
        assert targets.total_duration == 0.0


class TestCreateGoal:
    """Tests for GoalService.create_goal."""

    def test_creates_goal_with_schedule(self, create_goal, goal_repository):
        goal, verdict = create_goal()

        assert goal.id.startswith("goal_")
        assert sorted(goal.schedule) == ["2024-01-01", "2024-01-03", "2024-01-05", "2024-01-09", "2024-01-11"]
        assert goal.custom_workout_ids == tuple(WORKOUT_IDS)
        assert goal.status == GoalStatus.ACTIVE
        assert goal.targets.total_workouts == 5
        assert verdict.is_realistic is True
        assert goal_repository.get(goal.id) == goal

    def test_unrealistic_goal_is_still_created(self, create_goal, goal_repository):
        goal, verdict = create_goal(
            type=GoalType.WEIGHT_LOSS,
            target_value=20,
            target_unit="kg",
            end_date=date(2024, 1, 8),
        )

        assert verdict.is_realistic is False
        assert verdict.realism_score == 10
        assert goal_repository.exists(goal.id)

    def test_profile_feeds_the_realism_check(self, create_goal):
        _, verdict = create_goal(profile=FitnessProfile(fitness_level=FitnessLevel.ADVANCED, medical_conditions=["asthma"]))
        assert verdict.realism_score == 85

    def test_no_workouts_gives_empty_schedule(self, goal_service):
        goal, _ = goal_service.create_goal(
            user_id="user_1",
            title="Just a target",
            type=GoalType.CUSTOM,
            target_value=1,
            target_unit="sessions",
            start_date=date(2024, 1, 1),
            end_date=date(2024, 1, 14),
        )

        assert goal.schedule == {}
        assert goal.targets.total_workouts == 0
        assert goal.targets.workouts_per_week is None

    def test_end_before_start(self, create_goal):
        with pytest.raises(InvalidRangeError):
            create_goal(end_date=date(2023, 12, 20))

    def test_same_start_and_end(self, create_goal):
        with pytest.raises(InvalidRangeError):
            create_goal(end_date=date(2024, 1, 1))

    def test_short_title(self, create_goal):
        with pytest.raises(GoalValidationError):
            create_goal(title="A")

    def test_program_and_custom_workouts_conflict(self, create_goal):
        with pytest.raises(GoalValidationError) as exc_info:
            create_goal(program_id="program_1")

        assert exc_info.value.details["field"] == "workout_source"

    def test_unknown_workout(self, create_goal):
        with pytest.raises(WorkoutNotFoundError):
            create_goal(custom_workout_ids=["workout_0", "workout_9"])

    def test_unknown_program(self, create_goal):
        with pytest.raises(ProgramNotFoundError):
            create_goal(custom_workout_ids=[], program_id="program_missing")

    def test_program_source(self, create_goal, catalog_service):
        program = catalog_service.create_program(
            name="Foundations",
            workouts=[
                ProgramWorkout(workout_id="workout_2", day_of_week=1, week_number=2),
                ProgramWorkout(workout_id="workout_1", day_of_week=1),
            ],
        )
        goal, _ = create_goal(custom_workout_ids=[], program_id=program.id)

        assert goal.program_id == program.id
        assert goal.custom_workout_ids == ()
        assert [goal.schedule[k].workout.id for k in sorted(goal.schedule)][:3] == [
            "workout_1",
            "workout_2",
            "workout_1",
        ]

    def test_preview_matches_created_schedule(self, create_goal, goal_service):
        preview = goal_service.preview_schedule(date(2024, 1, 1), date(2024, 1, 14), custom_workout_ids=WORKOUT_IDS)
        goal, _ = create_goal()

        assert preview == goal.schedule


class TestGoalAccess:
    """Tests for reading, updating and deleting goals."""

    def test_get_goal_of_another_user(self, create_goal, goal_service):
        goal, _ = create_goal()

        with pytest.raises(ForbiddenError):
            goal_service.get_goal(goal.id, "user_2")

    def test_get_missing_goal(self, goal_service):
        with pytest.raises(GoalNotFoundError):
            goal_service.get_goal("goal_missing", "user_1")

    def test_list_goals(self, create_goal, goal_service):
        for i in range(3):
            create_goal(title=f"Goal number {i}")
        create_goal(user_id="user_2")

        result = goal_service.list_goals("user_1", PaginationParams(page=1, page_size=2))

        assert result.total == 3
        assert len(result.items) == 2
        assert result.total_pages == 2
        assert result.has_next is True
        assert result.has_previous is False

    def test_list_goals_by_status(self, create_goal, goal_service):
        goal, _ = create_goal()
        create_goal()
        goal_service.update_goal(goal.id, "user_1", status=GoalStatus.PAUSED)

        result = goal_service.list_goals("user_1", status=GoalStatus.PAUSED)
        assert [g.id for g in result.items] == [goal.id]

    def test_update_goal(self, create_goal, goal_service, goal_repository):
        goal, _ = create_goal()
        updated = goal_service.update_goal(goal.id, "user_1", title="Renamed block", priority="high", is_public=True)

        assert updated.title == "Renamed block"
        assert updated.priority == Priority.HIGH
        assert updated.is_public is True
        assert updated.schedule == goal.schedule
        assert goal_repository.get(goal.id).title == "Renamed block"

    def test_update_rejects_fixed_fields(self, create_goal, goal_service):
        goal, _ = create_goal()

        with pytest.raises(GoalValidationError):
            goal_service.update_goal(goal.id, "user_1", end_date=date(2024, 2, 1))

    def test_update_with_nothing_is_a_no_op(self, create_goal, goal_service):
        goal, _ = create_goal()
        assert goal_service.update_goal(goal.id, "user_1") == goal

    def test_delete_goal(self, create_goal, goal_service):
        goal, _ = create_goal()
        goal_service.delete_goal(goal.id, "user_1")

        with pytest.raises(GoalNotFoundError):
            goal_service.get_goal(goal.id, "user_1")

    def test_delete_goal_of_another_user(self, create_goal, goal_service, goal_repository):
        goal, _ = create_goal()

        with pytest.raises(ForbiddenError):
            goal_service.delete_goal(goal.id, "user_2")
        assert goal_repository.exists(goal.id)


class TestCompleteWorkout:
    """Tests for GoalService.complete_workout and progress reads."""

    def test_complete_workout(self, create_goal, goal_service):
        goal, _ = create_goal()
        updated = goal_service.complete_workout(
            goal.id, "user_1", date(2024, 1, 3),
            result=CompletionResult(calories_burned=220, duration_minutes=35),
            completed_at=datetime(2024, 1, 3, 19, 0),
        )

        assert updated.schedule["2024-01-03"].completed is True
        assert goal_service.get_goal(goal.id, "user_1") == updated

    def test_complete_unscheduled_day(self, create_goal, goal_service):
        goal, _ = create_goal()

        with pytest.raises(ScheduleEntryNotFoundError):
            goal_service.complete_workout(goal.id, "user_1", date(2024, 1, 2))

    def test_complete_twice(self, create_goal, goal_service):
        goal, _ = create_goal()
        goal_service.complete_workout(goal.id, "user_1", date(2024, 1, 1))

        with pytest.raises(WorkoutAlreadyCompletedError):
            goal_service.complete_workout(goal.id, "user_1", date(2024, 1, 1))

    def test_complete_for_another_user(self, create_goal, goal_service):
        goal, _ = create_goal()

        with pytest.raises(ForbiddenError):
            goal_service.complete_workout(goal.id, "user_2", date(2024, 1, 1))

    def test_completing_everything_completes_goal(self, create_goal, goal_service):
        goal, _ = create_goal()
        for key in sorted(goal.schedule):
            goal = goal_service.complete_workout(goal.id, "user_1", key)

        assert goal.status == GoalStatus.COMPLETED

    def test_get_progress(self, create_goal, goal_service):
        goal, _ = create_goal()
        goal_service.complete_workout(goal.id, "user_1", date(2024, 1, 1))

        progress = goal_service.get_progress(goal.id, "user_1", date(2024, 1, 2))

        assert progress["progress"]["completed_workouts"] == 1
        assert progress["progress"]["completion_percentage"] == 20
        assert progress["week_progress"] == {"completed": 1, "total": 3, "percentage": 33}
        assert progress["days_remaining"] == 12


class TestCurrentGoalAndDashboard:
    """Tests for current-goal selection and dashboard reads."""

    def test_current_goal(self, create_goal, goal_service):
        create_goal(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31))
        later, _ = create_goal(start_date=date(2024, 1, 5), end_date=date(2024, 1, 20))

        assert goal_service.get_current_goal("user_1", date(2024, 1, 10)).id == later.id
        assert goal_service.get_current_goal("user_1", date(2024, 3, 1)) is None
        assert goal_service.get_current_goal("user_2", date(2024, 1, 10)) is None

    def test_dashboard(self, create_goal, goal_service):
        goal, _ = create_goal()
        goal_service.complete_workout(goal.id, "user_1", date(2024, 1, 1))

        stats = goal_service.get_dashboard("user_1", date(2024, 1, 2))

        assert stats.total_goals == 1
        assert stats.total_workouts_completed == 1
        assert stats.current_goal.id == goal.id
        assert stats.week_progress.completed == 1


class TestCatalogService:
    """Tests for CatalogService."""

    def test_create_and_get_workout(self, catalog_service):
        workout = catalog_service.create_workout(name="Tempo run", estimated_duration_min=40)

        assert workout.id.startswith("workout_")
        assert catalog_service.get_workout(workout.id).name == "Tempo run"

    def test_get_missing_workout(self, catalog_service):
        with pytest.raises(WorkoutNotFoundError):
            catalog_service.get_workout("workout_missing")

    def test_list_workouts(self, catalog_service, stored_workouts):
        result = catalog_service.list_workouts(PaginationParams(page=1, page_size=2))

        assert result.total == 3
        assert [w.id for w in result.items] == ["workout_0", "workout_1"]

    def test_program_needs_workouts(self, catalog_service):
        with pytest.raises(ValidationError):
            catalog_service.create_program(name="Empty", workouts=[])

    def test_program_with_unknown_workout(self, catalog_service, stored_workouts):
        with pytest.raises(WorkoutNotFoundError):
            catalog_service.create_program(
                name="Broken",
                workouts=[ProgramWorkout("workout_0"), ProgramWorkout("workout_9")],
            )

    def test_get_missing_program(self, catalog_service):
        with pytest.raises(ProgramNotFoundError):
            catalog_service.get_program("program_missing")
