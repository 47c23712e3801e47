"""
Goal Realism Checking

Scores how achievable a goal is in its timeframe. The score starts at 100 and
loses points for an unsafe rate of change, a too-short timeline, a training
load above the user's level, and medical conditions. The verdict is advisory:
it is returned alongside a created goal and never blocks creation.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..models.goals import GoalType, validate_goal_dates
from ..models.profile import ActivityLevel, FitnessLevel, FitnessProfile
from ..models.workouts import Workout
from ..utils.dates import to_date
from .schedule import workouts_per_week


REALISM_PASSING_SCORE = 70

# Units accepted for mass targets, as kilograms per unit
MASS_UNITS = {
    "kg": 1.0,
    "kgs": 1.0,
    "lb": 0.4536,
    "lbs": 0.4536,
}
PERCENT_UNITS = {"%", "percent", "pct"}

# Maximum safe change per week
SAFE_WEEKLY_KG = {
    GoalType.WEIGHT_LOSS: 1.0,
    GoalType.WEIGHT_GAIN: 0.5,
    GoalType.MUSCLE_GAIN: 0.25,
}
SAFE_WEEKLY_PERCENT = {
    GoalType.STRENGTH: 2.0,
    GoalType.ENDURANCE: 3.0,
    GoalType.FLEXIBILITY: 5.0,
}

MAX_RATE_PENALTY = 80
RATE_PENALTY_FACTOR = 40

# Shortest sensible timelines in days
MIN_DAYS_BY_TYPE = {
    GoalType.WEIGHT_LOSS: 21,
    GoalType.MUSCLE_GAIN: 28,
}
MIN_DAYS_BEGINNER = 14

MAX_SESSIONS_PER_WEEK = {
    FitnessLevel.BEGINNER: 4,
    FitnessLevel.INTERMEDIATE: 5,
    FitnessLevel.ADVANCED: 7,
}
MAX_SESSION_MINUTES = {
    FitnessLevel.BEGINNER: 45,
    FitnessLevel.INTERMEDIATE: 75,
    FitnessLevel.ADVANCED: 120,
}
SEDENTARY_MAX_SESSIONS = 3

TIMELINE_PENALTY = 10
FREQUENCY_PENALTY = 30
SEDENTARY_PENALTY = 10
DURATION_PENALTY = 25
MEDICAL_PENALTY = 15


@dataclass(frozen=True)
class GoalParameters:
    """Everything the realism check looks at, before a goal exists."""

    type: GoalType
    target_value: float
    target_unit: str
    start_date: date
    end_date: date
    workout_pool: Sequence[Workout] = ()
    profile: Optional[FitnessProfile] = None

    def __post_init__(self):
        object.__setattr__(self, "start_date", to_date(self.start_date))
        object.__setattr__(self, "end_date", to_date(self.end_date))
        if isinstance(self.type, str):
            object.__setattr__(self, "type", GoalType(self.type))
        object.__setattr__(self, "workout_pool", tuple(self.workout_pool))
        validate_goal_dates(self.start_date, self.end_date)

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def weeks(self) -> float:
        return self.days / 7


@dataclass
class RealismVerdict:
    """Advisory outcome of a realism check."""

    realism_score: int
    is_realistic: bool
    feedback: str
    risk_level: str = "low"
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "realism_score": self.realism_score,
            "is_realistic": self.is_realistic,
            "risk_level": self.risk_level,
            "feedback": self.feedback,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
        }


_RISK_ORDER = ["low", "medium", "high"]


class _Assessment:
    """Accumulates penalties, messages and the worst risk seen."""

    def __init__(self) -> None:
        self.score = 100.0
        self.risk_level = "low"
        self.warnings: List[str] = []
        self.suggestions: List[str] = []

    def penalize(self, points: float, warning: str, suggestion: str, risk: str) -> None:
        self.score -= points
        self.warnings.append(warning)
        if suggestion not in self.suggestions:
            self.suggestions.append(suggestion)
        if _RISK_ORDER.index(risk) > _RISK_ORDER.index(self.risk_level):
            self.risk_level = risk


def _normalized_target(params: GoalParameters) -> Optional[Tuple[float, float, str]]:
    """
    Target in the unit its safe rate is expressed in.

    Returns (amount, safe weekly rate, unit label), or None when the goal
    type and unit have no safe-rate threshold.
    """
    unit = params.target_unit.strip().lower()
    if params.type in SAFE_WEEKLY_KG and unit in MASS_UNITS:
        return params.target_value * MASS_UNITS[unit], SAFE_WEEKLY_KG[params.type], "kg"
    if params.type in SAFE_WEEKLY_PERCENT and unit in PERCENT_UNITS:
        return params.target_value, SAFE_WEEKLY_PERCENT[params.type], "%"
    return None


def weekly_rate(params: GoalParameters) -> Optional[float]:
    """Requested change per week, in kg or percentage points."""
    normalized = _normalized_target(params)
    if normalized is None:
        return None
    return normalized[0] / params.weeks


def rate_penalty(rate: float, safe_rate: float) -> float:
    """Points lost for exceeding the safe rate; grows with the excess, capped."""
    if rate <= safe_rate:
        return 0.0
    return min(MAX_RATE_PENALTY, RATE_PENALTY_FACTOR * (rate / safe_rate - 1))


def _check_rate(params: GoalParameters, assessment: _Assessment) -> None:
    normalized = _normalized_target(params)
    if normalized is None:
        return

    amount, safe, unit = normalized
    rate = amount / params.weeks
    if rate <= safe:
        return

    weeks_needed = math.ceil(amount / safe)
    assessment.penalize(
        rate_penalty(rate, safe),
        f"Target requires {rate:.2f} {unit}/week, above the safe rate of {safe:g} {unit}/week",
        f"Extend your timeframe to at least {weeks_needed} weeks",
        "high",
    )
    max_target = params.target_value * safe / rate
    assessment.suggestions.append(
        f"Reduce your target to about {max_target:.1f} {params.target_unit} for this timeframe"
    )


def _check_timeline(params: GoalParameters, assessment: _Assessment) -> None:
    minimum = MIN_DAYS_BY_TYPE.get(params.type)
    if minimum is not None and params.days < minimum:
        assessment.penalize(
            TIMELINE_PENALTY,
            f"{params.days} days is a short timeline for a {params.type.value.replace('_', ' ')} goal",
            f"Consider extending the timeline to at least {minimum} days",
            "medium",
        )

    profile = params.profile
    if profile is not None and profile.fitness_level == FitnessLevel.BEGINNER and params.days < MIN_DAYS_BEGINNER:
        assessment.penalize(
            TIMELINE_PENALTY,
            "Goal timeline may be too ambitious for your current fitness level",
            "Consider extending the timeline or reducing the scope",
            "medium",
        )


def _check_load(params: GoalParameters, assessment: _Assessment) -> None:
    profile = params.profile
    pool = params.workout_pool
    if profile is None or not pool:
        return

    sessions = workouts_per_week(len(pool))
    max_sessions = MAX_SESSIONS_PER_WEEK[profile.fitness_level]
    if sessions > max_sessions:
        assessment.penalize(
            FREQUENCY_PENALTY,
            f"Goal schedules {sessions} workouts per week, but your fitness level supports at most {max_sessions}",
            f"Consider reducing to {max_sessions} workouts or fewer per week",
            "high",
        )

    if profile.activity_level == ActivityLevel.SEDENTARY and sessions > SEDENTARY_MAX_SESSIONS:
        assessment.penalize(
            SEDENTARY_PENALTY,
            f"{sessions} workouts per week is a big jump from a sedentary routine",
            f"Start with {SEDENTARY_MAX_SESSIONS} workouts per week and build up gradually",
            "medium",
        )

    avg_duration = sum(w.estimated_duration_min for w in pool) / len(pool)
    max_duration = MAX_SESSION_MINUTES[profile.fitness_level]
    if avg_duration > max_duration:
        assessment.penalize(
            DURATION_PENALTY,
            f"Average workout duration ({round(avg_duration)} min) exceeds your recommended maximum ({max_duration} min)",
            f"Consider shortening workouts to {max_duration} minutes or less",
            "high",
        )


def _check_medical(params: GoalParameters, assessment: _Assessment) -> None:
    profile = params.profile
    if profile is not None and profile.has_medical_conditions:
        assessment.penalize(
            MEDICAL_PENALTY,
            "Goal may not account for your medical conditions",
            "Consult a healthcare provider and modify exercises as needed",
            "medium",
        )


def check_realism(params: GoalParameters) -> RealismVerdict:
    """
    Score a goal's feasibility.

    For a fixed timeframe the score never increases as the target grows.

    Returns:
        RealismVerdict with a 0-100 score; is_realistic when the score is at
        least REALISM_PASSING_SCORE
    """
    assessment = _Assessment()

    _check_rate(params, assessment)
    _check_timeline(params, assessment)
    _check_load(params, assessment)
    _check_medical(params, assessment)

    score = int(round(max(0.0, min(100.0, assessment.score))))
    is_realistic = score >= REALISM_PASSING_SCORE

    suggestions = list(assessment.suggestions)
    if assessment.warnings:
        suggestions.append("Start conservatively and increase intensity gradually")
    else:
        suggestions.append("Remember to listen to your body and rest when needed")
    if params.profile is not None and params.profile.fitness_level == FitnessLevel.BEGINNER:
        suggestions.append("Focus on building consistency before increasing intensity")

    if is_realistic and not assessment.warnings:
        feedback = "This goal looks achievable within your timeframe."
    elif is_realistic:
        feedback = "This goal is achievable, but review the warnings before you start."
    else:
        feedback = "This goal may be too ambitious for the selected timeframe."

    return RealismVerdict(
        realism_score=score,
        is_realistic=is_realistic,
        feedback=feedback,
        risk_level=assessment.risk_level,
        warnings=assessment.warnings,
        suggestions=suggestions,
    )
