"""
Custom exceptions for the Goal Tracker.

This module defines a hierarchy of exceptions that provide clear error
handling throughout the application. Each exception includes:
- A descriptive message
- An error code for API responses
- HTTP status code mapping
- Optional details for debugging

"No data" situations (an empty workout pool, a goal without scheduled
workouts, completed entries missing calorie or duration data) are NOT
errors; the engine absorbs them into well-defined default values.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent API error responses."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"

    # Goal errors
    INVALID_RANGE = "INVALID_RANGE"
    GOAL_VALIDATION_ERROR = "GOAL_VALIDATION_ERROR"
    GOAL_NOT_FOUND = "GOAL_NOT_FOUND"
    SCHEDULE_ENTRY_NOT_FOUND = "SCHEDULE_ENTRY_NOT_FOUND"
    WORKOUT_ALREADY_COMPLETED = "WORKOUT_ALREADY_COMPLETED"

    # Catalog errors
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    PROGRAM_NOT_FOUND = "PROGRAM_NOT_FOUND"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class GoalTrackerError(Exception):
    """
    Base exception for all Goal Tracker errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        status_code: HTTP status code for API responses
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(GoalTrackerError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before (or, for goals, on) its start."""

    def __init__(
        self,
        start: Any,
        end: Any,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["start_date"] = str(start)
        error_details["end_date"] = str(end)
        super().__init__(
            message=message or f"End date {end} must not be before start date {start}",
            field="end_date",
            details=error_details,
        )
        self.code = ErrorCode.INVALID_RANGE


class GoalValidationError(ValidationError):
    """Raised when goal parameters fail validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.GOAL_VALIDATION_ERROR


# ============================================================================
# Authorization Errors (403)
# ============================================================================

class ForbiddenError(GoalTrackerError):
    """Raised when a user accesses a resource owned by someone else."""

    def __init__(
        self,
        message: str = "Access denied",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FORBIDDEN,
            status_code=403,
            details=details,
        )


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(GoalTrackerError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


class GoalNotFoundError(NotFoundError):
    """Raised when a goal is not found."""

    def __init__(self, goal_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Goal", resource_id=goal_id, details=details)
        self.code = ErrorCode.GOAL_NOT_FOUND


class WorkoutNotFoundError(NotFoundError):
    """Raised when a catalog workout is not found."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Workout", resource_id=workout_id, details=details)
        self.code = ErrorCode.WORKOUT_NOT_FOUND


class ProgramNotFoundError(NotFoundError):
    """Raised when a program is not found."""

    def __init__(self, program_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(resource_type="Program", resource_id=program_id, details=details)
        self.code = ErrorCode.PROGRAM_NOT_FOUND


class ScheduleEntryNotFoundError(NotFoundError):
    """Raised when a goal has no workout scheduled on the given date."""

    def __init__(
        self,
        goal_id: str,
        scheduled_date: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["goal_id"] = goal_id
        super().__init__(
            resource_type="Scheduled workout",
            resource_id=scheduled_date,
            details=error_details,
        )
        self.message = f"No workout scheduled on {scheduled_date} for goal '{goal_id}'"
        self.code = ErrorCode.SCHEDULE_ENTRY_NOT_FOUND


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(GoalTrackerError):
    """Raised when there's a resource conflict."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


class WorkoutAlreadyCompletedError(ConflictError):
    """Raised when recording a completion for an entry that is already complete."""

    def __init__(
        self,
        goal_id: str,
        scheduled_date: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        error_details["goal_id"] = goal_id
        error_details["scheduled_date"] = scheduled_date
        super().__init__(
            message=f"Workout scheduled on {scheduled_date} is already completed",
            details=error_details,
        )
        self.code = ErrorCode.WORKOUT_ALREADY_COMPLETED


# ============================================================================
# Database Errors (500)
# ============================================================================

class DatabaseError(GoalTrackerError):
    """Raised when a database operation fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(
            message=message,
            code=ErrorCode.DATABASE_ERROR,
            status_code=500,
            details=error_details,
        )
