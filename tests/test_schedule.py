"""Tests for schedule generation and workout pool resolution."""

import pytest
from datetime import date

from goal_tracker.engine.calendar import is_weekend
from goal_tracker.engine.schedule import (
    generate_schedule,
    resolve_workout_pool,
    schedule_from_list,
    schedule_to_list,
    step_days_for,
    workouts_per_week,
)
from goal_tracker.exceptions import InvalidRangeError, WorkoutNotFoundError
from goal_tracker.models.workouts import Program, ProgramWorkout, WorkoutRef


class TestCadence:
    """Tests for the weekly cadence derived from pool size."""

    @pytest.mark.parametrize("pool_size,expected", [(0, 0), (1, 1), (3, 3), (5, 5), (8, 5)])
    def test_workouts_per_week_is_capped(self, pool_size, expected):
        assert workouts_per_week(pool_size) == expected

    @pytest.mark.parametrize("pool_size,expected", [(0, 0), (1, 7), (2, 3), (3, 2), (4, 1), (7, 1)])
    def test_step_days(self, pool_size, expected):
        assert step_days_for(pool_size) == expected


class TestGenerateSchedule:
    """Tests for generate_schedule."""

    def test_three_workouts_over_two_weeks(self, workout_pool, monday):
        """Every other day from Monday; weekend candidates are dropped."""
        pool = workout_pool(3)
        schedule = generate_schedule(pool, monday, date(2024, 1, 14))

        assert sorted(schedule) == [
            "2024-01-01",
            "2024-01-03",
            "2024-01-05",
            "2024-01-09",
            "2024-01-11",
        ]
        assigned = [schedule[key].workout.id for key in sorted(schedule)]
        assert assigned == ["workout_0", "workout_1", "workout_2", "workout_0", "workout_1"]

    def test_entries_start_pending(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(3), monday, date(2024, 1, 14))

        for entry in schedule.values():
            assert entry.completed is False
            assert entry.completed_at is None
            assert entry.calories_burned is None

    def test_empty_pool_gives_empty_schedule(self, monday):
        assert generate_schedule([], monday, date(2024, 1, 14)) == {}

    def test_empty_pool_still_rejects_reversed_range(self, monday):
        with pytest.raises(InvalidRangeError):
            generate_schedule([], monday, date(2023, 12, 1))

    def test_reversed_range_raises(self, workout_pool, monday):
        with pytest.raises(InvalidRangeError):
            generate_schedule(workout_pool(2), monday, date(2023, 12, 25))

    def test_single_workout_weekly(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(1), monday, date(2024, 1, 14))
        assert sorted(schedule) == ["2024-01-01", "2024-01-08"]

    def test_five_workouts_fill_weekdays(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(5), monday, date(2024, 1, 14))

        assert len(schedule) == 10
        assert schedule["2024-01-08"].workout.id == "workout_0"
        assert schedule["2024-01-12"].workout.id == "workout_4"

    def test_large_pool_cycles_past_five(self, workout_pool, monday):
        """Cadence caps at five a week but the pool index keeps advancing."""
        schedule = generate_schedule(workout_pool(7), monday, date(2024, 1, 14))

        assert len(schedule) == 10
        assert schedule["2024-01-09"].workout.id == "workout_6"
        assert schedule["2024-01-10"].workout.id == "workout_0"

    def test_start_on_weekend(self, workout_pool):
        saturday = date(2024, 1, 6)
        schedule = generate_schedule(workout_pool(2), saturday, date(2024, 1, 20))

        assert sorted(schedule) == ["2024-01-09", "2024-01-12", "2024-01-15", "2024-01-18"]
        assert schedule["2024-01-09"].workout.id == "workout_0"

    def test_never_schedules_weekends(self, workout_pool, monday):
        for size in range(1, 8):
            schedule = generate_schedule(workout_pool(size), monday, date(2024, 3, 31))
            assert not any(is_weekend(entry.scheduled_date) for entry in schedule.values())

    def test_is_deterministic(self, workout_pool, monday):
        pool = workout_pool(4)
        first = generate_schedule(pool, monday, date(2024, 2, 29))
        second = generate_schedule(pool, monday, date(2024, 2, 29))

        assert first == second

    def test_entries_are_keyed_by_their_date(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(3), monday, date(2024, 2, 1))
        assert all(key == entry.scheduled_date.isoformat() for key, entry in schedule.items())

    def test_accepts_workout_refs(self, monday):
        refs = [WorkoutRef(id="a", name="A"), WorkoutRef(id="b", name="B")]
        schedule = generate_schedule(refs, monday, date(2024, 1, 7))

        assert [schedule[k].workout for k in sorted(schedule)] == [refs[0], refs[1]]

    def test_denormalizes_workout_fields(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(1, duration=50), monday, date(2024, 1, 2))

        ref = schedule["2024-01-01"].workout
        assert ref.name == "Workout 0"
        assert ref.duration_min == 50
        assert ref.type == "strength"


class TestScheduleSerialization:
    """Tests for the list form of a schedule."""

    def test_list_is_sorted_by_date(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(3), monday, date(2024, 1, 14))
        entries = schedule_to_list(schedule)

        dates = [e["scheduled_date"] for e in entries]
        assert dates == sorted(dates)

    def test_list_rebuilds_the_schedule(self, workout_pool, monday):
        schedule = generate_schedule(workout_pool(3), monday, date(2024, 1, 14))
        assert schedule_from_list(schedule_to_list(schedule)) == schedule


class TestResolveWorkoutPool:
    """Tests for resolve_workout_pool."""

    def test_custom_ids_keep_their_order(self, workout_pool):
        catalog = {w.id: w for w in workout_pool(3)}
        pool = resolve_workout_pool(catalog, custom_workout_ids=["workout_2", "workout_0"])

        assert [w.id for w in pool] == ["workout_2", "workout_0"]

    def test_program_orders_by_week_day_and_position(self, workout_pool):
        catalog = {w.id: w for w in workout_pool(4)}
        program = Program(
            id="program_1",
            name="Base",
            workouts=[
                ProgramWorkout(workout_id="workout_0", day_of_week=1, week_number=2),
                ProgramWorkout(workout_id="workout_1", day_of_week=3, week_number=1),
                ProgramWorkout(workout_id="workout_2", day_of_week=1, week_number=1, order=2),
                ProgramWorkout(workout_id="workout_3", day_of_week=1, week_number=1, order=1),
            ],
        )
        pool = resolve_workout_pool(catalog, program=program)

        assert [w.id for w in pool] == ["workout_3", "workout_2", "workout_1", "workout_0"]

    def test_unknown_workout_raises(self, workout_pool):
        catalog = {w.id: w for w in workout_pool(2)}

        with pytest.raises(WorkoutNotFoundError) as exc_info:
            resolve_workout_pool(catalog, custom_workout_ids=["workout_0", "missing"])

        assert exc_info.value.status_code == 404

    def test_no_source_gives_empty_pool(self):
        assert resolve_workout_pool({}) == []
