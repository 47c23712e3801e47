"""
Catalog service for workouts and programs.

Goals draw their workout pools from this catalog.
"""

from typing import List, Optional
import logging

from .base import BaseService, PaginatedResult, PaginationParams
from ..db.repositories.workout_repository import ProgramRepository, WorkoutRepository
from ..exceptions import ProgramNotFoundError, ValidationError, WorkoutNotFoundError
from ..models.workouts import Difficulty, Program, ProgramWorkout, Workout, WorkoutType


class CatalogService(BaseService):
    """Service for workout catalog business logic."""

    def __init__(
        self,
        workout_repository: WorkoutRepository,
        program_repository: ProgramRepository,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(logger=logger)
        self._workouts = workout_repository
        self._programs = program_repository

    def create_workout(
        self,
        name: str,
        type: WorkoutType = WorkoutType.MIXED,
        difficulty: Difficulty = Difficulty.BEGINNER,
        estimated_duration_min: int = 30,
        calories_burned: Optional[float] = None,
        description: str = "",
    ) -> Workout:
        workout = Workout.create(
            name=name,
            type=type,
            difficulty=difficulty,
            estimated_duration_min=estimated_duration_min,
            calories_burned=calories_burned,
            description=description,
        )
        self._workouts.save(workout)
        self.logger.info(f"Added workout {workout.id} ({workout.name}) to the catalog")
        return workout

    def get_workout(self, workout_id: str) -> Workout:
        workout = self._workouts.get(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        return workout

    def list_workouts(
        self,
        pagination: Optional[PaginationParams] = None,
        type: Optional[WorkoutType] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> PaginatedResult[Workout]:
        pagination = pagination or PaginationParams()
        filters = {"type": type, "difficulty": difficulty, "active_only": True}
        return PaginatedResult(
            items=self._workouts.get_all(limit=pagination.limit, offset=pagination.offset, **filters),
            total=self._workouts.count(**filters),
            page=pagination.page,
            page_size=pagination.page_size,
        )

    def create_program(
        self,
        name: str,
        workouts: List[ProgramWorkout],
        category: str = "general_fitness",
        difficulty: Difficulty = Difficulty.BEGINNER,
        description: str = "",
    ) -> Program:
        """
        Create a program from existing catalog workouts.

        Raises:
            ValidationError: the program has no workouts
            WorkoutNotFoundError: a slot references an unknown workout
        """
        if not workouts:
            raise ValidationError("A program needs at least one workout", field="workouts")

        known = self._workouts.get_many(w.workout_id for w in workouts)
        for slot in workouts:
            if slot.workout_id not in known:
                raise WorkoutNotFoundError(slot.workout_id)

        program = Program.create(
            name=name,
            workouts=workouts,
            category=category,
            difficulty=difficulty,
            description=description,
        )
        self._programs.save(program)
        self.logger.info(f"Created program {program.id} with {len(workouts)} workouts")
        return program

    def get_program(self, program_id: str) -> Program:
        program = self._programs.get(program_id)
        if program is None:
            raise ProgramNotFoundError(program_id)
        return program

    def list_programs(
        self,
        pagination: Optional[PaginationParams] = None,
        category: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> PaginatedResult[Program]:
        pagination = pagination or PaginationParams()
        filters = {"category": category, "difficulty": difficulty}
        return PaginatedResult(
            items=self._programs.get_all(limit=pagination.limit, offset=pagination.offset, **filters),
            total=self._programs.count(**filters),
            page=pagination.page,
            page_size=pagination.page_size,
        )
