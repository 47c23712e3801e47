"""
Program API routes.

A program is an ordered set of catalog workouts; choosing one as a goal's
workout source makes its workouts the schedule's pool.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..deps import get_catalog_service
from ...models.schemas import ProgramCreateRequest
from ...models.workouts import Difficulty, ProgramWorkout
from ...services.base import PaginationParams
from ...services.catalog_service import CatalogService

router = APIRouter()


@router.get("")
def list_programs(
    category: Optional[str] = Query(None, description="Filter by category"),
    difficulty: Optional[Difficulty] = Query(None, description="Filter by difficulty"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(20, ge=1, le=100, description="Items per page"),
    service: CatalogService = Depends(get_catalog_service),
):
    result = service.list_programs(
        PaginationParams(page=page, page_size=limit),
        category=category,
        difficulty=difficulty,
    )
    return result.to_dict(lambda p: p.to_dict())


@router.post("", status_code=201)
def create_program(
    request: ProgramCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """Create a program; every slot must reference an existing workout."""
    program = service.create_program(
        name=request.name,
        workouts=[ProgramWorkout(**slot.model_dump()) for slot in request.workouts],
        category=request.category,
        difficulty=request.difficulty,
        description=request.description,
    )
    return {"program": program.to_dict()}


@router.get("/{program_id}")
def get_program(
    program_id: str,
    service: CatalogService = Depends(get_catalog_service),
):
    return {"program": service.get_program(program_id).to_dict()}
