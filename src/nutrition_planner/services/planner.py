"""Planner service combining stored inventory and recipes with the matcher."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_planner.domain.inventory import (
    InventoryItem,
    MissingIngredient,
    RecipeAvailability,
    RecipeWithAvailability,
)
from nutrition_planner.domain.recipes import Recipe
from nutrition_planner.services.matching import (
    AvailabilityFilter,
    InventoryMatcher,
    calculate_total_missing_ingredients,
    filter_recipes_by_availability,
)


class InventoryRepository(Protocol):
    """Read-only access to a user's inventory."""

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        """Return all inventory items held by a user."""


class RecipeRepository(Protocol):
    """Read-only access to stored recipes."""

    def list_recipes(self, limit: int) -> list[Recipe]:
        """Return stored recipes."""

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""


@dataclass
class PlannerService:
    """Scores stored recipes against a user's current inventory."""

    inventory_repository: InventoryRepository
    recipe_repository: RecipeRepository
    matcher: InventoryMatcher
    recipe_limit: int = 50

    def browse(
        self,
        user_id: UUID,
        mode: AvailabilityFilter = AvailabilityFilter.ALL,
        max_missing: int = 3,
    ) -> list[RecipeWithAvailability]:
        """Return stored recipes sorted by how ready they are to cook."""
        inventory = self.inventory_repository.list_items(user_id)
        recipes = self.recipe_repository.list_recipes(self.recipe_limit)
        ranked = self.matcher.get_recipes_with_availability(recipes, inventory)
        return filter_recipes_by_availability(ranked, mode, max_missing)

    def availability(self, user_id: UUID, recipe_id: str) -> RecipeAvailability | None:
        """Return availability of one stored recipe, or ``None`` if unknown."""
        recipe = self.recipe_repository.get_recipe(recipe_id)
        if recipe is None:
            return None
        inventory = self.inventory_repository.list_items(user_id)
        return self.matcher.calculate_recipe_availability(recipe, inventory)

    def shopping_list(
        self, user_id: UUID, recipe_ids: list[str] | None = None
    ) -> list[MissingIngredient]:
        """Merge what's missing across recipes that can't be cooked yet."""
        inventory = self.inventory_repository.list_items(user_id)
        if recipe_ids:
            recipes = [
                recipe
                for recipe in map(self.recipe_repository.get_recipe, recipe_ids)
                if recipe is not None
            ]
        else:
            recipes = self.recipe_repository.list_recipes(self.recipe_limit)
        ranked = self.matcher.get_recipes_with_availability(recipes, inventory)
        pending = [entry for entry in ranked if not entry.availability.can_cook_now]
        return calculate_total_missing_ingredients(pending)
