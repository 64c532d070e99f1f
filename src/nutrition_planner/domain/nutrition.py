"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Calories and macronutrients, either per 100g or for a portion."""

    calories: float
    protein: float
    carbs: float
    fats: float

    @classmethod
    def zero(cls) -> "MacroProfile":
        """Return an all-zero profile."""
        return cls(calories=0.0, protein=0.0, carbs=0.0, fats=0.0)

    def __add__(self, other: "MacroProfile") -> "MacroProfile":
        return MacroProfile(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fats=self.fats + other.fats,
        )

    def scale(self, factor: float) -> "MacroProfile":
        """Return the profile multiplied by a factor."""
        return MacroProfile(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fats=self.fats * factor,
        )


@dataclass(frozen=True)
class Quantity:
    """Amount and unit recovered from free text."""

    amount: float
    unit: str


@dataclass(frozen=True)
class RecipeNutrition:
    """Whole-recipe totals with the per-serving breakdown."""

    totals: MacroProfile
    per_serving: MacroProfile
    servings: int
    servings_estimated: bool
