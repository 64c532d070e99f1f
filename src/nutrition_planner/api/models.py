"""Pydantic models for API request payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from nutrition_planner.domain.nutrition import MacroProfile
from nutrition_planner.domain.recipes import Ingredient, Recipe
from nutrition_planner.domain.recommendations import (
    MealRecommendationRequest,
    MealType,
    TimeOfDay,
)


class IngredientPayload(BaseModel):
    """Recipe ingredient as sent by recipe sources."""

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    original_name: str | None = Field(default=None, alias="originalName")
    amount: float | None = None
    quantity: float | None = None
    unit: str | None = None
    original: str | None = None

    def to_domain(self) -> Ingredient:
        return Ingredient.from_payload(self.model_dump(by_alias=True))


class RecipePayload(BaseModel):
    """Recipe submitted for nutrition analysis."""

    id: str = ""
    title: str = ""
    servings: int = 0
    ready_in_minutes: int | None = None
    ingredients: list[IngredientPayload] = Field(default_factory=list)

    def to_domain(self) -> Recipe:
        return Recipe(
            id=self.id,
            title=self.title,
            ingredients=[ingredient.to_domain() for ingredient in self.ingredients],
            servings=self.servings,
            ready_in_minutes=self.ready_in_minutes,
        )


class MacroPayload(BaseModel):
    """Calories and macros in grams."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fats: float = 0

    def to_domain(self) -> MacroProfile:
        return MacroProfile(
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fats=self.fats,
        )


class RecommendationPayload(BaseModel):
    """Remaining daily targets used to request meal suggestions."""

    remaining_targets: MacroPayload
    time_of_day: TimeOfDay
    meal_type: MealType | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    goal_type: Literal["lose", "maintain", "gain"] = "maintain"

    def to_domain(self) -> MealRecommendationRequest:
        return MealRecommendationRequest(
            remaining_targets=self.remaining_targets.to_domain(),
            time_of_day=self.time_of_day,
            meal_type=self.meal_type,
            dietary_restrictions=list(self.dietary_restrictions),
            goal_type=self.goal_type,
        )
