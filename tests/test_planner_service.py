"""Tests for the planner service."""

from uuid import uuid4

import pytest
from conftest import (
    InMemoryInventoryRepository,
    InMemoryRecipeRepository,
    make_item,
    make_recipe,
)

from nutrition_planner.services.matching import AvailabilityFilter, InventoryMatcher
from nutrition_planner.services.planner import PlannerService


def _service(
    inventory: InMemoryInventoryRepository, recipes: InMemoryRecipeRepository
) -> PlannerService:
    return PlannerService(
        inventory_repository=inventory,
        recipe_repository=recipes,
        matcher=InventoryMatcher(),
    )


def test_browse_ranks_and_filters_recipes() -> None:
    user_id = uuid4()
    inventory = InMemoryInventoryRepository(
        items={user_id: [make_item("Eggs"), make_item("Flour")]}
    )
    recipes = InMemoryRecipeRepository(
        recipes=[
            make_recipe("cake", "eggs", "flour", "sugar", "butter"),
            make_recipe("omelette", "eggs"),
            make_recipe("pancakes", "eggs", "flour", "milk"),
        ]
    )
    service = _service(inventory, recipes)

    ranked = service.browse(user_id)
    assert [entry.recipe.id for entry in ranked] == ["omelette", "pancakes", "cake"]

    ready = service.browse(user_id, mode=AvailabilityFilter.CAN_MAKE_NOW)
    assert [entry.recipe.id for entry in ready] == ["omelette"]

    few = service.browse(user_id, mode=AvailabilityFilter.MISSING_FEW, max_missing=1)
    assert [entry.recipe.id for entry in few] == ["pancakes"]


def test_browse_uses_recipe_limit() -> None:
    recipes = InMemoryRecipeRepository(
        recipes=[make_recipe(f"r{index}", "rice") for index in range(5)]
    )
    service = PlannerService(
        inventory_repository=InMemoryInventoryRepository(),
        recipe_repository=recipes,
        matcher=InventoryMatcher(),
        recipe_limit=2,
    )
    assert len(service.browse(uuid4())) == 2


def test_availability_for_single_recipe() -> None:
    user_id = uuid4()
    inventory = InMemoryInventoryRepository(items={user_id: [make_item("Rice")]})
    recipes = InMemoryRecipeRepository(
        recipes=[make_recipe("bowl", "rice", "beans")]
    )
    service = _service(inventory, recipes)

    availability = service.availability(user_id, "bowl")
    assert availability is not None
    assert availability.availability_percentage == 50
    assert service.availability(user_id, "unknown") is None


def test_shopping_list_merges_pending_recipes() -> None:
    user_id = uuid4()
    inventory = InMemoryInventoryRepository(items={user_id: [make_item("Rice")]})
    recipes = InMemoryRecipeRepository(
        recipes=[
            make_recipe("plain", "rice"),
            make_recipe("bowl", "rice", "beans"),
            make_recipe("chili", "beans", "onion"),
        ]
    )
    service = _service(inventory, recipes)

    items = service.shopping_list(user_id)
    assert [(item.name, item.required_unit) for item in items] == [
        ("beans", "unit"),
        ("onion", "unit"),
    ]

    only_chili = service.shopping_list(user_id, ["chili", "missing"])
    assert [item.name for item in only_chili] == ["beans", "onion"]


def test_repository_errors_propagate() -> None:
    service = _service(
        InMemoryInventoryRepository(fail=True), InMemoryRecipeRepository()
    )
    with pytest.raises(RuntimeError):
        service.browse(uuid4())
