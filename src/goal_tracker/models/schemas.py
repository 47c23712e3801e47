"""
API schemas for request/response validation.

Request bodies are validated here; cross-field rules that belong to the
domain (date ranges, exclusive workout sources) are enforced by the models
and engine so the CLI and the API reject the same inputs.
"""

from typing import Any, Dict, List, Optional
from datetime import date, datetime

from pydantic import BaseModel, Field, ConfigDict

from .goals import GoalStatus, GoalType, PerceivedDifficulty, Priority
from .profile import ActivityLevel, FitnessLevel
from .workouts import Difficulty, WorkoutType


# ============================================================================
# Base Response Models
# ============================================================================

class ErrorDetail(BaseModel):
    """Error detail for API responses."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: ErrorDetail

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": {
                    "code": "INVALID_RANGE",
                    "message": "End date 2024-01-01 must be after start date 2024-01-10",
                }
            }
        }
    )


class SuccessResponse(BaseModel):
    """Simple success response."""

    success: bool = True
    message: Optional[str] = None


# ============================================================================
# Catalog Schemas
# ============================================================================

class WorkoutCreateRequest(BaseModel):
    """Request model for adding a workout to the catalog."""

    name: str = Field(..., min_length=1, max_length=200)
    type: WorkoutType = WorkoutType.MIXED
    difficulty: Difficulty = Difficulty.BEGINNER
    estimated_duration_min: int = Field(default=30, ge=1, le=600, description="Estimated duration in minutes")
    calories_burned: Optional[float] = Field(None, ge=0, description="Estimated calories burned")
    description: str = Field(default="", max_length=2000)


class ProgramWorkoutRequest(BaseModel):
    """One workout slot inside a program."""

    workout_id: str
    day_of_week: int = Field(default=0, ge=0, le=6, description="0 = Sunday")
    week_number: int = Field(default=1, ge=1)
    order: int = Field(default=1, ge=1)


class ProgramCreateRequest(BaseModel):
    """Request model for creating a program."""

    name: str = Field(..., min_length=1, max_length=200)
    category: str = Field(default="general_fitness", max_length=50)
    difficulty: Difficulty = Difficulty.BEGINNER
    description: str = Field(default="", max_length=2000)
    workouts: List[ProgramWorkoutRequest] = Field(..., min_length=1)


# ============================================================================
# Goal Schemas
# ============================================================================

class FitnessProfileRequest(BaseModel):
    """Optional context for the realism check."""

    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    medical_conditions: List[str] = Field(default_factory=list)


class GoalTargetsRequest(BaseModel):
    workouts_per_week: Optional[int] = Field(None, ge=1, le=7)
    total_workouts: Optional[int] = Field(None, ge=0)
    total_calories: Optional[float] = Field(None, ge=0)
    total_duration: Optional[float] = Field(None, ge=0)


class SchedulePreviewRequest(BaseModel):
    """Date range plus workout source; enough to generate a schedule."""

    start_date: date
    end_date: date
    program_id: Optional[str] = None
    custom_workout_ids: List[str] = Field(default_factory=list)


class GoalParametersRequest(SchedulePreviewRequest):
    """Goal parameters as evaluated by the realism check."""

    type: GoalType
    target_value: float = Field(..., gt=0)
    target_unit: str = Field(..., min_length=1, max_length=20)
    fitness_profile: Optional[FitnessProfileRequest] = None


class GoalCreateRequest(GoalParametersRequest):
    """Request model for creating a goal."""

    title: str = Field(..., min_length=2, max_length=100)
    description: str = Field(default="", max_length=500)
    priority: Priority = Priority.MEDIUM
    is_public: bool = False
    targets: Optional[GoalTargetsRequest] = None


class GoalUpdateRequest(BaseModel):
    """Fields of a goal that can change after creation."""

    title: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    status: Optional[GoalStatus] = None
    priority: Optional[Priority] = None
    is_public: Optional[bool] = None


class CompleteWorkoutRequest(BaseModel):
    """Request model for marking a scheduled workout complete."""

    scheduled_date: date
    calories_burned: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[float] = Field(None, ge=0, le=720)
    notes: Optional[str] = Field(None, max_length=1000)
    difficulty: Optional[PerceivedDifficulty] = None
    enjoyment: Optional[int] = Field(None, ge=1, le=5)
    completed_at: Optional[datetime] = None


# ============================================================================
# Response Schemas
# ============================================================================

class RealismVerdictResponse(BaseModel):
    realism_score: int = Field(..., ge=0, le=100)
    is_realistic: bool
    risk_level: str
    feedback: str
    warnings: List[str]
    suggestions: List[str]


class ProgressResponse(BaseModel):
    completion_percentage: int = Field(..., ge=0, le=100)
    completed_workouts: int
    total_workouts: int
    total_calories_burned: float
    total_duration: float


class WeekProgressResponse(BaseModel):
    completed: int
    total: int
    percentage: int


class GoalProgressResponse(BaseModel):
    """Overall and current-week progress for one goal."""

    goal_id: str
    progress: ProgressResponse
    week_progress: WeekProgressResponse
    days_remaining: int
    status: GoalStatus
    achievements: List[Dict[str, Any]] = Field(default_factory=list)
