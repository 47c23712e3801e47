"""Workout catalog models: workouts, programs and the denormalized workout reference."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
import uuid


class WorkoutType(str, Enum):
    """Kinds of catalog workouts."""
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    SPORTS = "sports"
    YOGA = "yoga"
    PILATES = "pilates"
    CROSSFIT = "crossfit"
    MIXED = "mixed"


class Difficulty(str, Enum):
    """Difficulty levels shared by workouts and programs."""
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass
class Workout:
    """
    A workout from the catalog.

    Workouts are the unit the schedule generator distributes over a goal's
    date range; the estimates feed the realism checker.
    """
    id: str
    name: str
    type: WorkoutType = WorkoutType.MIXED
    difficulty: Difficulty = Difficulty.BEGINNER
    estimated_duration_min: int = 30
    calories_burned: Optional[float] = None
    description: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = WorkoutType(self.type)
        if isinstance(self.difficulty, str):
            self.difficulty = Difficulty(self.difficulty)

    @classmethod
    def create(
        cls,
        name: str,
        type: WorkoutType = WorkoutType.MIXED,
        difficulty: Difficulty = Difficulty.BEGINNER,
        estimated_duration_min: int = 30,
        calories_burned: Optional[float] = None,
        description: str = "",
    ) -> "Workout":
        """Factory method to create a new workout with auto-generated ID."""
        return cls(
            id=f"workout_{uuid.uuid4().hex[:12]}",
            name=name,
            type=type,
            difficulty=difficulty,
            estimated_duration_min=estimated_duration_min,
            calories_burned=calories_burned,
            description=description,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "difficulty": self.difficulty.value,
            "estimated_duration_min": self.estimated_duration_min,
            "calories_burned": self.calories_burned,
            "description": self.description,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Workout":
        """Create from dictionary."""
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            id=data["id"],
            name=data["name"],
            type=WorkoutType(data.get("type", WorkoutType.MIXED.value)),
            difficulty=Difficulty(data.get("difficulty", Difficulty.BEGINNER.value)),
            estimated_duration_min=data.get("estimated_duration_min", 30),
            calories_burned=data.get("calories_burned"),
            description=data.get("description") or "",
            is_active=data.get("is_active", True),
            created_at=created_at or datetime.now(),
        )


@dataclass(frozen=True)
class WorkoutRef:
    """Workout id plus the fields a schedule displays without a catalog lookup."""
    id: str
    name: str
    duration_min: Optional[int] = None
    type: Optional[str] = None

    @classmethod
    def from_workout(cls, workout: Workout) -> "WorkoutRef":
        return cls(
            id=workout.id,
            name=workout.name,
            duration_min=workout.estimated_duration_min,
            type=workout.type.value,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "duration_min": self.duration_min,
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutRef":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            duration_min=data.get("duration_min"),
            type=data.get("type"),
        )


@dataclass
class ProgramWorkout:
    """A workout slot inside a program."""
    workout_id: str
    day_of_week: int = 0    # 0 = Sunday
    week_number: int = 1
    order: int = 1

    def __post_init__(self):
        if not 0 <= self.day_of_week <= 6:
            raise ValueError(f"day_of_week must be between 0 and 6, got {self.day_of_week}")
        if self.week_number < 1:
            raise ValueError(f"week_number must be at least 1, got {self.week_number}")

    def to_dict(self) -> dict:
        return {
            "workout_id": self.workout_id,
            "day_of_week": self.day_of_week,
            "week_number": self.week_number,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProgramWorkout":
        return cls(
            workout_id=data["workout_id"],
            day_of_week=data.get("day_of_week", 0),
            week_number=data.get("week_number", 1),
            order=data.get("order", 1),
        )


@dataclass
class Program:
    """
    A curated sequence of catalog workouts.

    Selecting a program as a goal's workout source uses its workouts as the
    schedule generator's pool, ordered by week, day and position.
    """
    id: str
    name: str
    workouts: List[ProgramWorkout]
    category: str = "general_fitness"
    difficulty: Difficulty = Difficulty.BEGINNER
    description: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if isinstance(self.difficulty, str):
            self.difficulty = Difficulty(self.difficulty)
        self.workouts = [
            ProgramWorkout.from_dict(w) if isinstance(w, dict) else w
            for w in self.workouts
        ]

    @classmethod
    def create(
        cls,
        name: str,
        workouts: List[ProgramWorkout],
        category: str = "general_fitness",
        difficulty: Difficulty = Difficulty.BEGINNER,
        description: str = "",
    ) -> "Program":
        """Factory method to create a new program with auto-generated ID."""
        return cls(
            id=f"program_{uuid.uuid4().hex[:12]}",
            name=name,
            workouts=workouts,
            category=category,
            difficulty=difficulty,
            description=description,
        )

    @property
    def ordered_workout_ids(self) -> List[str]:
        """Workout ids in program order (week, day of week, position)."""
        ordered = sorted(
            self.workouts,
            key=lambda w: (w.week_number, w.day_of_week, w.order),
        )
        return [w.workout_id for w in ordered]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "difficulty": self.difficulty.value,
            "description": self.description,
            "workouts": [w.to_dict() for w in self.workouts],
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Program":
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            id=data["id"],
            name=data["name"],
            workouts=[ProgramWorkout.from_dict(w) for w in data.get("workouts", [])],
            category=data.get("category", "general_fitness"),
            difficulty=Difficulty(data.get("difficulty", Difficulty.BEGINNER.value)),
            description=data.get("description") or "",
            is_active=data.get("is_active", True),
            created_at=created_at or datetime.now(),
        )
