"""
Fitness Goals and Schedules

A goal owns its schedule: a date-keyed map of scheduled workouts. Goal values
are immutable; recording a completion or replacing the schedule produces a
new Goal via dataclasses.replace.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import uuid

from ..exceptions import GoalValidationError, InvalidRangeError
from ..utils.dates import to_date, parse_optional_datetime
from .workouts import WorkoutRef


class GoalType(str, Enum):
    """What a goal is trying to change."""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MUSCLE_GAIN = "muscle_gain"
    ENDURANCE = "endurance"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    CUSTOM = "custom"


class GoalStatus(str, Enum):
    """Lifecycle states of a goal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PerceivedDifficulty(str, Enum):
    """How a completed workout felt."""

    TOO_EASY = "too_easy"
    JUST_RIGHT = "just_right"
    TOO_HARD = "too_hard"


class AchievementType(str, Enum):
    MILESTONE = "milestone"
    STREAK = "streak"
    PERSONAL_BEST = "personal_best"
    CONSISTENCY = "consistency"


@dataclass(frozen=True)
class CompletionResult:
    """What the user reports when marking a scheduled workout complete."""

    calories_burned: Optional[float] = None
    duration_minutes: Optional[float] = None
    notes: Optional[str] = None
    difficulty: Optional[PerceivedDifficulty] = None
    enjoyment: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.difficulty, str):
            object.__setattr__(self, "difficulty", PerceivedDifficulty(self.difficulty))
        if self.enjoyment is not None and not 1 <= self.enjoyment <= 5:
            raise GoalValidationError("Enjoyment must be between 1 and 5", field="enjoyment")
        if self.calories_burned is not None and self.calories_burned < 0:
            raise GoalValidationError("Calories burned cannot be negative", field="calories_burned")
        if self.duration_minutes is not None and self.duration_minutes < 0:
            raise GoalValidationError("Duration cannot be negative", field="duration_minutes")


@dataclass(frozen=True)
class ScheduleEntry:
    """One scheduled workout occurrence, completed or pending."""

    workout: WorkoutRef
    scheduled_date: date
    completed: bool = False
    completed_at: Optional[datetime] = None
    calories_burned: Optional[float] = None
    duration_minutes: Optional[float] = None
    notes: Optional[str] = None
    difficulty: Optional[PerceivedDifficulty] = None
    enjoyment: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "scheduled_date", to_date(self.scheduled_date))
        if isinstance(self.difficulty, str):
            object.__setattr__(self, "difficulty", PerceivedDifficulty(self.difficulty))

    @property
    def date_key(self) -> str:
        """ISO date used as this entry's key in a schedule."""
        return self.scheduled_date.isoformat()

    def mark_completed(
        self,
        result: CompletionResult,
        completed_at: Optional[datetime] = None,
    ) -> "ScheduleEntry":
        """Return a completed copy of this entry carrying the reported result."""
        return replace(
            self,
            completed=True,
            completed_at=completed_at or datetime.now(),
            calories_burned=result.calories_burned,
            duration_minutes=result.duration_minutes,
            notes=result.notes,
            difficulty=result.difficulty,
            enjoyment=result.enjoyment,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workout": self.workout.to_dict(),
            "scheduled_date": self.date_key,
            "completed": self.completed,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "calories_burned": self.calories_burned,
            "duration_minutes": self.duration_minutes,
            "notes": self.notes,
            "difficulty": self.difficulty.value if self.difficulty else None,
            "enjoyment": self.enjoyment,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleEntry":
        return cls(
            workout=WorkoutRef.from_dict(data["workout"]),
            scheduled_date=to_date(data["scheduled_date"]),
            completed=bool(data.get("completed", False)),
            completed_at=parse_optional_datetime(data.get("completed_at")),
            calories_burned=data.get("calories_burned"),
            duration_minutes=data.get("duration_minutes"),
            notes=data.get("notes"),
            difficulty=data.get("difficulty"),
            enjoyment=data.get("enjoyment"),
        )


Schedule = Dict[str, ScheduleEntry]


def schedule_to_list(schedule: Schedule) -> List[Dict[str, Any]]:
    """Serialize a schedule map as an array of entries sorted by date."""
    return [schedule[key].to_dict() for key in sorted(schedule)]


def schedule_from_list(entries: List[Dict[str, Any]]) -> Schedule:
    """Rebuild a schedule map from its serialized array; later duplicates win."""
    schedule: Schedule = {}
    for data in entries:
        entry = ScheduleEntry.from_dict(data)
        schedule[entry.date_key] = entry
    return schedule


@dataclass(frozen=True)
class Achievement:
    """Something worth celebrating, earned while working on a goal."""

    type: AchievementType
    description: str
    earned_at: datetime = field(default_factory=datetime.now)
    value: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.type, str):
            object.__setattr__(self, "type", AchievementType(self.type))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "earned_at": self.earned_at.isoformat(),
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Achievement":
        return cls(
            type=AchievementType(data["type"]),
            description=data["description"],
            earned_at=parse_optional_datetime(data.get("earned_at")) or datetime.now(),
            value=data.get("value") or {},
        )


@dataclass(frozen=True)
class GoalTargets:
    """Volume targets a goal commits to."""

    workouts_per_week: Optional[int] = None
    total_workouts: int = 0
    total_calories: float = 0.0
    total_duration: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workouts_per_week": self.workouts_per_week,
            "total_workouts": self.total_workouts,
            "total_calories": self.total_calories,
            "total_duration": self.total_duration,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GoalTargets":
        data = data or {}
        return cls(
            workouts_per_week=data.get("workouts_per_week"),
            total_workouts=data.get("total_workouts", 0),
            total_calories=data.get("total_calories", 0.0),
            total_duration=data.get("total_duration", 0.0),
        )


def validate_goal_dates(start_date: date, end_date: date) -> None:
    """A goal must end strictly after it starts."""
    if end_date <= start_date:
        raise InvalidRangeError(
            start_date,
            end_date,
            message=f"End date {end_date.isoformat()} must be after start date {start_date.isoformat()}",
        )


def validate_workout_source(program_id: Optional[str], custom_workout_ids) -> None:
    """A goal draws its workouts from a program or a custom list, never both."""
    if program_id and custom_workout_ids:
        raise GoalValidationError(
            "Choose either a program or custom workouts, not both",
            field="workout_source",
        )


@dataclass(frozen=True)
class Goal:
    """
    A user's fitness goal.

    The goal is the sole owner of its schedule map. Use the engine functions
    (generate_schedule, record_completion) to derive updated goals.
    """

    id: str
    user_id: str
    title: str
    type: GoalType
    target_value: float
    target_unit: str
    start_date: date
    end_date: date
    description: str = ""
    program_id: Optional[str] = None
    custom_workout_ids: Tuple[str, ...] = ()
    schedule: Schedule = field(default_factory=dict)
    priority: Priority = Priority.MEDIUM
    is_public: bool = False
    status: GoalStatus = GoalStatus.ACTIVE
    targets: GoalTargets = field(default_factory=GoalTargets)
    achievements: Tuple[Achievement, ...] = ()
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Coerce loose inputs and enforce the goal invariants."""
        object.__setattr__(self, "start_date", to_date(self.start_date))
        object.__setattr__(self, "end_date", to_date(self.end_date))
        if isinstance(self.type, str):
            object.__setattr__(self, "type", GoalType(self.type))
        if isinstance(self.priority, str):
            object.__setattr__(self, "priority", Priority(self.priority))
        if isinstance(self.status, str):
            object.__setattr__(self, "status", GoalStatus(self.status))
        object.__setattr__(self, "custom_workout_ids", tuple(self.custom_workout_ids))
        object.__setattr__(self, "achievements", tuple(self.achievements))

        validate_goal_dates(self.start_date, self.end_date)
        validate_workout_source(self.program_id, self.custom_workout_ids)

    @classmethod
    def create(
        cls,
        user_id: str,
        title: str,
        type: GoalType,
        target_value: float,
        target_unit: str,
        start_date: date,
        end_date: date,
        **kwargs: Any,
    ) -> "Goal":
        """Factory method to create a new goal with auto-generated ID."""
        return cls(
            id=f"goal_{uuid.uuid4().hex[:12]}",
            user_id=user_id,
            title=title,
            type=type,
            target_value=target_value,
            target_unit=target_unit,
            start_date=start_date,
            end_date=end_date,
            **kwargs,
        )

    def contains(self, reference_date: date) -> bool:
        """Whether reference_date falls inside [start_date, end_date]."""
        return self.start_date <= to_date(reference_date) <= self.end_date

    def days_remaining(self, reference_date: Optional[date] = None) -> int:
        """Days left until end_date, never negative."""
        reference = to_date(reference_date) if reference_date else date.today()
        return max(0, (self.end_date - reference).days)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "target_value": self.target_value,
            "target_unit": self.target_unit,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "program_id": self.program_id,
            "custom_workout_ids": list(self.custom_workout_ids),
            "schedule": schedule_to_list(self.schedule),
            "priority": self.priority.value,
            "is_public": self.is_public,
            "status": self.status.value,
            "targets": self.targets.to_dict(),
            "achievements": [a.to_dict() for a in self.achievements],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        """Create from dictionary."""
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            title=data["title"],
            description=data.get("description") or "",
            type=GoalType(data["type"]),
            target_value=data["target_value"],
            target_unit=data["target_unit"],
            start_date=to_date(data["start_date"]),
            end_date=to_date(data["end_date"]),
            program_id=data.get("program_id"),
            custom_workout_ids=tuple(data.get("custom_workout_ids") or ()),
            schedule=schedule_from_list(data.get("schedule") or []),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            is_public=bool(data.get("is_public", False)),
            status=GoalStatus(data.get("status", GoalStatus.ACTIVE.value)),
            targets=GoalTargets.from_dict(data.get("targets")),
            achievements=tuple(Achievement.from_dict(a) for a in data.get("achievements") or ()),
            created_at=parse_optional_datetime(data.get("created_at")) or datetime.now(),
            updated_at=parse_optional_datetime(data.get("updated_at")),
        )
