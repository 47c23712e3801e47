"""
Goal service for business logic around goals.

Handles:
- Resolving a goal's workout source against the catalog
- Schedule generation and realism checks at creation time
- Ownership checks, updates and completion recording
- Current goal selection and dashboard statistics

Every method loads what it needs from the repositories, runs the pure engine
functions, and persists the result.
"""

import math
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

from .base import BaseService, PaginatedResult, PaginationParams
from ..db.repositories.base import GoalRepository
from ..db.repositories.workout_repository import ProgramRepository, WorkoutRepository
from ..engine.calendar import SUNDAY
from ..engine.dashboard import DashboardStats, compute_dashboard, select_current_goal
from ..engine.progress import goal_progress
from ..engine.realism import GoalParameters, RealismVerdict, check_realism
from ..engine.schedule import generate_schedule, resolve_workout_pool
from ..exceptions import (
    ForbiddenError,
    GoalNotFoundError,
    GoalValidationError,
    ProgramNotFoundError,
)
from ..models.goals import (
    CompletionResult,
    Goal,
    GoalStatus,
    GoalTargets,
    GoalType,
    Priority,
    Schedule,
    validate_goal_dates,
    validate_workout_source,
)
from ..models.profile import FitnessProfile
from ..models.workouts import Program, Workout


TITLE_MIN_LENGTH = 2
TITLE_MAX_LENGTH = 100

UPDATABLE_FIELDS = ("title", "description", "status", "priority", "is_public")


def validate_title(title: str) -> str:
    title = (title or "").strip()
    if not TITLE_MIN_LENGTH <= len(title) <= TITLE_MAX_LENGTH:
        raise GoalValidationError(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters",
            field="title",
        )
    return title


def derive_targets(schedule: Schedule, start_date: date, end_date: date, supplied: Optional[Dict[str, Any]] = None) -> GoalTargets:
    """
    Volume targets for a new goal.

    Supplied values win; otherwise the workout count comes from the schedule
    and the weekly cadence from the count spread over the goal's weeks.
    """
    supplied = {k: v for k, v in (supplied or {}).items() if v is not None}
    total_workouts = supplied.get("total_workouts", len(schedule))
    weeks = (end_date - start_date).days / 7

    workouts_per_week = supplied.get("workouts_per_week")
    if workouts_per_week is None and total_workouts and weeks > 0:
        workouts_per_week = math.ceil(total_workouts / weeks)

    return GoalTargets(
        workouts_per_week=workouts_per_week,
        total_workouts=total_workouts,
        total_calories=supplied.get("total_calories", 0.0),
        total_duration=supplied.get("total_duration", 0.0),
    )


class GoalService(BaseService):
    """
    Service for goal-related business logic.

    Sits between the API and the engine: the engine stays storage-free and
    the routes stay thin.
    """

    def __init__(
        self,
        goal_repository: GoalRepository,
        workout_repository: WorkoutRepository,
        program_repository: ProgramRepository,
        week_start_day: int = SUNDAY,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger=logger)
        self._goals = goal_repository
        self._workouts = workout_repository
        self._programs = program_repository
        self.week_start_day = week_start_day

    # =========================================================================
    # Workout pool
    # =========================================================================

    def resolve_pool(
        self,
        program_id: Optional[str] = None,
        custom_workout_ids: Sequence[str] = (),
    ) -> Tuple[List[Workout], Optional[Program]]:
        """
        Load the ordered workout pool for a program or a custom list.

        Raises:
            GoalValidationError: both a program and custom workouts were given
            ProgramNotFoundError: the program does not exist
            WorkoutNotFoundError: a referenced workout does not exist
        """
        validate_workout_source(program_id, custom_workout_ids)

        program = None
        if program_id:
            program = self._programs.get(program_id)
            if program is None:
                raise ProgramNotFoundError(program_id)
            workout_ids: Iterable[str] = program.ordered_workout_ids
        else:
            workout_ids = custom_workout_ids

        catalog = self._workouts.get_many(workout_ids)
        pool = resolve_workout_pool(catalog, program=program, custom_workout_ids=custom_workout_ids)
        return pool, program

    def preview_schedule(
        self,
        start_date: date,
        end_date: date,
        program_id: Optional[str] = None,
        custom_workout_ids: Sequence[str] = (),
    ) -> Schedule:
        """Generate the schedule a goal with these parameters would get."""
        validate_goal_dates(start_date, end_date)
        pool, _ = self.resolve_pool(program_id, custom_workout_ids)
        return generate_schedule(pool, start_date, end_date)

    # =========================================================================
    # Realism
    # =========================================================================

    def check_realism(
        self,
        type: GoalType,
        target_value: float,
        target_unit: str,
        start_date: date,
        end_date: date,
        program_id: Optional[str] = None,
        custom_workout_ids: Sequence[str] = (),
        profile: Optional[FitnessProfile] = None,
    ) -> RealismVerdict:
        """Score goal parameters before anything is created."""
        pool, _ = self.resolve_pool(program_id, custom_workout_ids)
        params = GoalParameters(
            type=type,
            target_value=target_value,
            target_unit=target_unit,
            start_date=start_date,
            end_date=end_date,
            workout_pool=pool,
            profile=profile,
        )
        return check_realism(params)

    # =========================================================================
    # Goal lifecycle
    # =========================================================================

    def create_goal(
        self,
        user_id: str,
        title: str,
        type: GoalType,
        target_value: float,
        target_unit: str,
        start_date: date,
        end_date: date,
        description: str = "",
        program_id: Optional[str] = None,
        custom_workout_ids: Sequence[str] = (),
        priority: Priority = Priority.MEDIUM,
        is_public: bool = False,
        targets: Optional[Dict[str, Any]] = None,
        profile: Optional[FitnessProfile] = None,
    ) -> Tuple[Goal, RealismVerdict]:
        """
        Create a goal with its generated schedule.

        The realism verdict is returned alongside the goal; a failing verdict
        is logged but never blocks creation.

        Raises:
            InvalidRangeError: end_date is not after start_date
            GoalValidationError: invalid title or conflicting workout sources
        """
        title = validate_title(title)
        validate_goal_dates(start_date, end_date)
        pool, _ = self.resolve_pool(program_id, custom_workout_ids)

        verdict = check_realism(GoalParameters(
            type=type,
            target_value=target_value,
            target_unit=target_unit,
            start_date=start_date,
            end_date=end_date,
            workout_pool=pool,
            profile=profile,
        ))

        schedule = generate_schedule(pool, start_date, end_date)
        goal = Goal.create(
            user_id=user_id,
            title=title,
            type=type,
            target_value=target_value,
            target_unit=target_unit,
            start_date=start_date,
            end_date=end_date,
            description=description,
            program_id=program_id,
            custom_workout_ids=tuple(custom_workout_ids) if not program_id else (),
            schedule=schedule,
            priority=priority,
            is_public=is_public,
            targets=derive_targets(schedule, start_date, end_date, targets),
        )
        self._goals.save(goal)

        self.logger.info(
            f"Created goal {goal.id} for user {user_id} with {len(schedule)} scheduled workouts"
        )
        if not schedule:
            self.logger.info(f"Goal {goal.id} has no scheduled workouts")
        if not verdict.is_realistic:
            self.logger.warning(
                f"Goal {goal.id} created with realism score {verdict.realism_score}"
            )
        return goal, verdict

    def get_goal(self, goal_id: str, user_id: str) -> Goal:
        """
        Get a goal owned by user_id.

        Raises:
            GoalNotFoundError: no goal with that id
            ForbiddenError: the goal belongs to another user
        """
        goal = self._goals.get(goal_id)
        if goal is None:
            raise GoalNotFoundError(goal_id)
        if goal.user_id != user_id:
            raise ForbiddenError(details={"goal_id": goal_id})
        return goal

    def list_goals(
        self,
        user_id: str,
        pagination: Optional[PaginationParams] = None,
        status: Optional[GoalStatus] = None,
    ) -> PaginatedResult[Goal]:
        """Goals owned by user_id, newest first."""
        pagination = pagination or PaginationParams()
        goals = self._goals.get_all(
            limit=pagination.limit,
            offset=pagination.offset,
            user_id=user_id,
            status=status,
        )
        total = self._goals.count(user_id=user_id, status=status)
        return PaginatedResult(
            items=goals,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    def update_goal(self, goal_id: str, user_id: str, **changes: Any) -> Goal:
        """
        Change a goal's descriptive fields or status.

        Only title, description, status, priority and is_public can change;
        dates and the workout source are fixed once the schedule exists.
        """
        goal = self.get_goal(goal_id, user_id)

        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise GoalValidationError(
                f"Cannot update fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)},
            )

        updates = {k: v for k, v in changes.items() if v is not None}
        if "title" in updates:
            updates["title"] = validate_title(updates["title"])
        if "status" in updates:
            updates["status"] = GoalStatus(updates["status"])
        if "priority" in updates:
            updates["priority"] = Priority(updates["priority"])
        if not updates:
            return goal

        updated = replace(goal, updated_at=datetime.now(), **updates)
        self._goals.save(updated)
        self.logger.info(f"Updated goal {goal_id}: {', '.join(sorted(updates))}")
        return updated

    def delete_goal(self, goal_id: str, user_id: str) -> None:
        """Delete a goal and its whole schedule."""
        self.get_goal(goal_id, user_id)
        self._goals.delete(goal_id)
        self.logger.info(f"Deleted goal {goal_id}")

    def complete_workout(
        self,
        goal_id: str,
        user_id: str,
        scheduled_date: date,
        result: Optional[CompletionResult] = None,
        completed_at: Optional[datetime] = None,
    ) -> Goal:
        """
        Mark the workout scheduled on scheduled_date as completed.

        Raises:
            GoalNotFoundError, ForbiddenError: see get_goal
            ScheduleEntryNotFoundError: nothing scheduled on that date
            WorkoutAlreadyCompletedError: already completed
        """
        self.get_goal(goal_id, user_id)
        updated = self._goals.record_completion(goal_id, scheduled_date, result, completed_at)
        if updated.status == GoalStatus.COMPLETED:
            self.logger.info(f"Goal {goal_id} completed")
        return updated

    # =========================================================================
    # Progress and dashboard
    # =========================================================================

    def get_progress(
        self,
        goal_id: str,
        user_id: str,
        reference_date: Optional[date] = None,
    ) -> Dict[str, Any]:
        goal = self.get_goal(goal_id, user_id)
        return goal_progress(goal, reference_date or date.today(), self.week_start_day)

    def get_current_goal(self, user_id: str, reference_date: Optional[date] = None) -> Optional[Goal]:
        """The goal in progress on reference_date (default today), if any."""
        return select_current_goal(self._goals.load(user_id), reference_date or date.today())

    def get_dashboard(self, user_id: str, reference_date: Optional[date] = None) -> DashboardStats:
        goals = self._goals.load(user_id)
        return compute_dashboard(goals, reference_date or date.today(), self.week_start_day)
