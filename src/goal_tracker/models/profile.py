"""Fitness profile used as optional context for realism checks."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FitnessLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


@dataclass(frozen=True)
class FitnessProfile:
    """What we know about the user's current fitness."""

    fitness_level: FitnessLevel = FitnessLevel.BEGINNER
    activity_level: ActivityLevel = ActivityLevel.MODERATELY_ACTIVE
    medical_conditions: List[str] = field(default_factory=list)

    def __post_init__(self):
        if isinstance(self.fitness_level, str):
            object.__setattr__(self, "fitness_level", FitnessLevel(self.fitness_level))
        if isinstance(self.activity_level, str):
            object.__setattr__(self, "activity_level", ActivityLevel(self.activity_level))

    @property
    def has_medical_conditions(self) -> bool:
        return any(c.strip() for c in self.medical_conditions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fitness_level": self.fitness_level.value,
            "activity_level": self.activity_level.value,
            "medical_conditions": list(self.medical_conditions),
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "FitnessProfile":
        data = data or {}
        return cls(
            fitness_level=FitnessLevel(data.get("fitness_level", FitnessLevel.BEGINNER.value)),
            activity_level=ActivityLevel(
                data.get("activity_level", ActivityLevel.MODERATELY_ACTIVE.value)
            ),
            medical_conditions=list(data.get("medical_conditions") or []),
        )
