"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID

import pytest

from nutrition_planner.config import Settings
from nutrition_planner.containers import AppContainer
from nutrition_planner.domain.inventory import InventoryCategory, InventoryItem
from nutrition_planner.domain.recipes import Ingredient, Recipe
from nutrition_planner.services.facts import NutritionFactsTable
from nutrition_planner.services.matching import InventoryMatcher
from nutrition_planner.services.nutrition import NutritionAggregator
from nutrition_planner.services.planner import (
    InventoryRepository,
    PlannerService,
    RecipeRepository,
)
from nutrition_planner.services.recommendations import MealRecommendationEngine
from nutrition_planner.services.units import UnitConverter


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory inventory repository for tests."""

    items: dict[UUID, list[InventoryItem]] = field(default_factory=dict)
    fail: bool = False

    def list_items(self, user_id: UUID) -> list[InventoryItem]:
        if self.fail:
            raise RuntimeError("inventory unavailable")
        return list(self.items.get(user_id, []))


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: list[Recipe] = field(default_factory=list)

    def list_recipes(self, limit: int) -> list[Recipe]:
        return self.recipes[:limit]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None


def make_item(name: str, quantity: float = 1, unit: str = "pcs") -> InventoryItem:
    return InventoryItem(
        id=name.lower().replace(" ", "-"),
        name=name,
        quantity=quantity,
        unit=unit,
        category=InventoryCategory.OTHER,
    )


def make_recipe(recipe_id: str, *names: str, servings: int = 0) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=recipe_id.title(),
        ingredients=[Ingredient(name=name) for name in names],
        servings=servings,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.key.signature",
        api_token="api-token",
    )


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def container(
    settings: Settings,
    inventory_repository: InMemoryInventoryRepository,
    recipe_repository: InMemoryRecipeRepository,
) -> AppContainer:
    facts = NutritionFactsTable()
    converter = UnitConverter(facts)
    matcher = InventoryMatcher()
    return AppContainer(
        settings=settings,
        converter=converter,
        nutrition=NutritionAggregator(facts=facts, converter=converter),
        matcher=matcher,
        recommendations=MealRecommendationEngine(),
        planner_service=PlannerService(
            inventory_repository=inventory_repository,
            recipe_repository=recipe_repository,
            matcher=matcher,
        ),
    )
