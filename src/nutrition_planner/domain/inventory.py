"""Domain models for pantry inventory and recipe availability."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from nutrition_planner.domain.recipes import Recipe


class InventoryCategory(StrEnum):
    """Grocery category an inventory item is filed under."""

    PRODUCE = "Produce"
    DAIRY = "Dairy"
    MEAT = "Meat"
    SEAFOOD = "Seafood"
    FROZEN = "Frozen"
    PANTRY = "Pantry"
    BAKERY = "Bakery"
    BEVERAGES = "Beverages"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: object) -> "InventoryCategory":
        """Return the matching category, defaulting to ``OTHER``."""
        for category in cls:
            if isinstance(value, str) and value.strip().lower() == category.lower():
                return category
        return cls.OTHER


@dataclass(frozen=True)
class InventoryItem:
    """An item held in the user's inventory."""

    id: str
    name: str
    quantity: float
    unit: str
    category: InventoryCategory = InventoryCategory.OTHER
    expiry_date: date | None = None


@dataclass(frozen=True)
class MissingIngredient:
    """A recipe ingredient that has no inventory match."""

    name: str
    required_quantity: float
    required_unit: str
    available_quantity: float
    shortfall: float


@dataclass(frozen=True)
class RecipeAvailability:
    """How much of a recipe the current inventory covers."""

    recipe_id: str
    available_ingredients: int
    total_ingredients: int
    availability_percentage: int
    missing_ingredients: list[MissingIngredient]
    can_cook_now: bool
    recommendation_reason: str


@dataclass(frozen=True)
class RecipeWithAvailability:
    """A recipe paired with its availability against an inventory."""

    recipe: Recipe
    availability: RecipeAvailability
