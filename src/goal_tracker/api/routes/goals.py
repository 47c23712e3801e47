"""
Goal API routes.

Provides endpoints for creating goals with generated schedules, checking a
goal's realism, recording completed workouts and reading progress and
dashboard statistics.
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_current_user_id, get_goal_service
from ...engine.progress import compute_progress
from ...engine.schedule import schedule_to_list
from ...models.goals import CompletionResult, Goal, GoalStatus
from ...models.profile import FitnessProfile
from ...models.schemas import (
    CompleteWorkoutRequest,
    ErrorResponse,
    FitnessProfileRequest,
    GoalCreateRequest,
    GoalParametersRequest,
    GoalProgressResponse,
    GoalUpdateRequest,
    RealismVerdictResponse,
    SchedulePreviewRequest,
    SuccessResponse,
)
from ...services.base import PaginationParams
from ...services.goal_service import GoalService

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}


def goal_payload(goal: Goal, reference_date: Optional[date] = None) -> Dict[str, Any]:
    """Serialized goal with its progress snapshot; days_remaining counts from reference_date."""
    payload = goal.to_dict()
    payload["progress"] = compute_progress(goal.schedule).to_dict()
    payload["days_remaining"] = goal.days_remaining(reference_date)
    return payload


def _profile(request: Optional[FitnessProfileRequest]) -> Optional[FitnessProfile]:
    if request is None:
        return None
    return FitnessProfile(
        fitness_level=request.fitness_level,
        activity_level=request.activity_level,
        medical_conditions=list(request.medical_conditions),
    )


# =============================================================================
# Creation and pre-creation checks
# =============================================================================

@router.post("", status_code=201)
def create_goal(
    request: GoalCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """
    Create a goal and generate its workout schedule.

    Workouts are drawn from either a program or a custom list of workout
    ids. The realism check runs alongside and is returned with the goal;
    an unrealistic goal is still created.
    """
    goal, verdict = service.create_goal(
        user_id=user_id,
        title=request.title,
        type=request.type,
        target_value=request.target_value,
        target_unit=request.target_unit,
        start_date=request.start_date,
        end_date=request.end_date,
        description=request.description,
        program_id=request.program_id,
        custom_workout_ids=request.custom_workout_ids,
        priority=request.priority,
        is_public=request.is_public,
        targets=request.targets.model_dump() if request.targets else None,
        profile=_profile(request.fitness_profile),
    )
    return {
        "goal": goal_payload(goal),
        "realism_check": verdict.to_dict(),
    }


@router.post("/check-realism", response_model=RealismVerdictResponse)
def check_goal_realism(
    request: GoalParametersRequest,
    service: GoalService = Depends(get_goal_service),
):
    """Score goal parameters before creating the goal."""
    verdict = service.check_realism(
        type=request.type,
        target_value=request.target_value,
        target_unit=request.target_unit,
        start_date=request.start_date,
        end_date=request.end_date,
        program_id=request.program_id,
        custom_workout_ids=request.custom_workout_ids,
        profile=_profile(request.fitness_profile),
    )
    return verdict.to_dict()


@router.post("/schedule/preview")
def preview_schedule(
    request: SchedulePreviewRequest,
    service: GoalService = Depends(get_goal_service),
):
    """Generate the schedule a goal would get, without saving anything."""
    schedule = service.preview_schedule(
        start_date=request.start_date,
        end_date=request.end_date,
        program_id=request.program_id,
        custom_workout_ids=request.custom_workout_ids,
    )
    return {
        "schedule": schedule_to_list(schedule),
        "total": len(schedule),
    }


# =============================================================================
# Current goal and dashboard
# =============================================================================

@router.get("/current")
def get_current_goal(
    reference_date: Optional[date] = Query(None, description="Day to evaluate (YYYY-MM-DD), default today"),
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """The goal in progress on the reference date; null when there is none."""
    goal = service.get_current_goal(user_id, reference_date)
    return {"goal": goal_payload(goal, reference_date) if goal else None}


@router.get("/dashboard/stats")
def get_dashboard_stats(
    reference_date: Optional[date] = Query(None, description="Day to evaluate (YYYY-MM-DD), default today"),
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Current goal summary, this week's progress and totals across all goals."""
    return service.get_dashboard(user_id, reference_date).to_dict()


# =============================================================================
# Goal CRUD
# =============================================================================

@router.get("")
def list_goals(
    status: Optional[GoalStatus] = Query(None, description="Filter by status"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """List the caller's goals, newest first."""
    result = service.list_goals(
        user_id,
        pagination=PaginationParams(page=page, page_size=limit),
        status=status,
    )
    return result.to_dict(goal_payload)


@router.get("/{goal_id}", responses=NOT_FOUND)
def get_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    return {"goal": goal_payload(service.get_goal(goal_id, user_id))}


@router.patch("/{goal_id}", responses=NOT_FOUND)
def update_goal(
    goal_id: str,
    request: GoalUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Update a goal's title, description, status, priority or visibility."""
    goal = service.update_goal(goal_id, user_id, **request.model_dump(exclude_none=True))
    return {"goal": goal_payload(goal)}


@router.delete("/{goal_id}", response_model=SuccessResponse, responses=NOT_FOUND)
def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    service.delete_goal(goal_id, user_id)
    return SuccessResponse(message="Goal deleted")


# =============================================================================
# Progress
# =============================================================================

@router.get("/{goal_id}/progress", response_model=GoalProgressResponse, responses=NOT_FOUND)
def get_goal_progress(
    goal_id: str,
    reference_date: Optional[date] = Query(None, description="Day to evaluate (YYYY-MM-DD), default today"),
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """Overall progress, this week's progress and achievements."""
    return service.get_progress(goal_id, user_id, reference_date)


@router.post(
    "/{goal_id}/complete-workout",
    responses={**NOT_FOUND, 409: {"model": ErrorResponse}},
)
def complete_workout(
    goal_id: str,
    request: CompleteWorkoutRequest,
    user_id: str = Depends(get_current_user_id),
    service: GoalService = Depends(get_goal_service),
):
    """
    Mark the workout scheduled on a date as completed.

    Returns 404 when nothing is scheduled that day and 409 when it was
    already completed.
    """
    result = CompletionResult(
        calories_burned=request.calories_burned,
        duration_minutes=request.duration_minutes,
        notes=request.notes,
        difficulty=request.difficulty,
        enjoyment=request.enjoyment,
    )
    goal = service.complete_workout(
        goal_id,
        user_id,
        request.scheduled_date,
        result=result,
        completed_at=request.completed_at,
    )
    return {
        "message": "Workout marked as completed",
        "goal": goal_payload(goal),
    }
