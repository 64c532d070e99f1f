"""Domain models for meal recommendations."""

from dataclasses import dataclass, field
from enum import StrEnum

from nutrition_planner.domain.nutrition import MacroProfile


class RecommendationType(StrEnum):
    HIGH_PROTEIN = "high-protein"
    BALANCED = "balanced"
    LOW_CALORIE = "low-calorie"


class MealType(StrEnum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class TimeOfDay(StrEnum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class Urgency(StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class MealTemplate:
    """A reference meal with macros for a single standard portion."""

    name: str
    description: str
    base: MacroProfile
    ingredients: tuple[str, ...]
    prep_time: int
    difficulty: str


@dataclass(frozen=True)
class MealRecommendationRequest:
    """Remaining daily targets and preferences used to pick meals."""

    remaining_targets: MacroProfile
    time_of_day: TimeOfDay
    meal_type: MealType | None = None
    dietary_restrictions: list[str] = field(default_factory=list)
    goal_type: str = "maintain"


@dataclass(frozen=True)
class MealRecommendation:
    """A portion-scaled meal suggestion."""

    kind: str
    name: str
    description: str
    nutrition: MacroProfile
    reasoning: str
    urgency: Urgency
    ingredients: list[str]
    preparation_time: int
    difficulty: str
    portion_guidance: str | None = None
