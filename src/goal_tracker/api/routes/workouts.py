"""
Workout catalog API routes.

Workouts added here can be used in programs or picked directly as a goal's
custom workout list.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_catalog_service
from ...models.schemas import WorkoutCreateRequest
from ...models.workouts import Difficulty, WorkoutType
from ...services.base import PaginationParams
from ...services.catalog_service import CatalogService

router = APIRouter()


@router.get("")
def list_workouts(
    type: Optional[WorkoutType] = Query(None, description="Filter by workout type"),
    difficulty: Optional[Difficulty] = Query(None, description="Filter by difficulty"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    service: CatalogService = Depends(get_catalog_service),
):
    """List active catalog workouts ordered by name."""
    result = service.list_workouts(
        PaginationParams(page=page, page_size=limit),
        type=type,
        difficulty=difficulty,
    )
    return result.to_dict(lambda w: w.to_dict())


@router.post("", status_code=201)
def create_workout(
    request: WorkoutCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    workout = service.create_workout(
        name=request.name,
        type=request.type,
        difficulty=request.difficulty,
        estimated_duration_min=request.estimated_duration_min,
        calories_burned=request.calories_burned,
        description=request.description,
    )
    return {"workout": workout.to_dict()}


@router.get("/{workout_id}")
def get_workout(
    workout_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    return {"workout": service.get_workout(workout_id).to_dict()}
