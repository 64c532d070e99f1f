"""Tests for recipe nutrition aggregation and serving estimation."""

import logging

import pytest

from nutrition_planner.domain.nutrition import MacroProfile
from nutrition_planner.domain.recipes import Ingredient, Recipe
from nutrition_planner.services.facts import NUTRITION_PER_100G
from nutrition_planner.services.nutrition import (
    MAX_SERVINGS,
    NutritionAggregator,
    combine_estimates,
)


def _chicken(grams: float = 200) -> Ingredient:
    return Ingredient(name="chicken breast", amount=grams, unit="g")


def test_compute_totals_scales_per_100g_facts() -> None:
    totals = NutritionAggregator().compute_totals([_chicken()])
    assert totals.calories == pytest.approx(330)
    assert totals.protein == pytest.approx(62)
    assert totals.carbs == pytest.approx(0)
    assert totals.fats == pytest.approx(7.2)


def test_compute_totals_empty_is_none() -> None:
    assert NutritionAggregator().compute_totals([]) is None


def test_compute_totals_skips_unmatched_and_unweighable() -> None:
    totals = NutritionAggregator().compute_totals(
        [
            Ingredient(name="unicorn meat", amount=100, unit="g"),
            Ingredient(name="flour", amount=3, unit="handfuls"),
            Ingredient(name="rice", amount=100, unit="g"),
        ]
    )
    assert totals.calories == pytest.approx(130)


def test_unmatched_ingredient_logged_in_debug(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(logging.getLogger("nutrition_planner"), "propagate", True)
    caplog.set_level(logging.INFO, logger="nutrition_planner.services.nutrition")
    NutritionAggregator(debug=True).compute_totals(
        [Ingredient(name="unicorn meat", amount=100, unit="g")]
    )
    assert "No nutrition facts for unicorn meat" in caplog.text


def test_eggs_and_calories_drive_serving_estimate() -> None:
    aggregator = NutritionAggregator()
    eggs = [Ingredient(name="eggs", amount=4)]
    assert aggregator.estimate_servings(eggs) == 2
    assert aggregator.estimate_servings(eggs, MacroProfile(2400, 0, 0, 0)) == 4


def test_bread_slices_drive_serving_estimate() -> None:
    aggregator = NutritionAggregator()
    toast = [Ingredient(name="bread", amount=6, unit="slices")]
    assert aggregator.estimate_servings(toast) == 3


def test_serving_estimate_is_clamped() -> None:
    aggregator = NutritionAggregator()
    huge = MacroProfile(100_000, 0, 0, 0)
    assert aggregator.estimate_servings([_chicken()], huge) == MAX_SERVINGS
    assert aggregator.estimate_servings([]) == 1


def test_combine_estimates_ignores_missing_candidates() -> None:
    assert combine_estimates([None, 0, None]) == 1
    assert combine_estimates([2, None, 5]) == 5
    assert combine_estimates([40]) == MAX_SERVINGS


def test_compute_per_serving_rounds_for_display() -> None:
    per_serving = NutritionAggregator().compute_per_serving([_chicken()], servings=4)
    assert per_serving.calories == 83
    assert per_serving.protein == pytest.approx(15.5)
    assert per_serving.fats == pytest.approx(1.8)


def test_compute_per_serving_treats_zero_servings_as_one() -> None:
    per_serving = NutritionAggregator().compute_per_serving([_chicken()], servings=0)
    assert per_serving.calories == 330


def test_summarize_recipe_uses_declared_servings() -> None:
    recipe = Recipe(id="r1", title="Chicken", ingredients=[_chicken()], servings=4)
    summary = NutritionAggregator().summarize_recipe(recipe)
    assert summary.servings == 4
    assert summary.servings_estimated is False
    assert summary.per_serving.calories == 83


def test_summarize_recipe_estimates_missing_servings() -> None:
    recipe = Recipe(id="r1", title="Chicken", ingredients=[_chicken(600)])
    summary = NutritionAggregator().summarize_recipe(recipe)
    assert summary.servings == 4
    assert summary.servings_estimated is True
    assert summary.per_serving.calories == 248


def test_summarize_empty_recipe_is_none() -> None:
    aggregator = NutritionAggregator()
    empty = Recipe(id="r1", title="Empty", servings=3)
    assert aggregator.summarize_recipe(empty) is None
    assert aggregator.compute_for_recipe(empty) is None
    assert aggregator.estimate_servings_for_recipe(empty) == 3


def test_estimate_servings_for_recipe_prefers_declared_value() -> None:
    aggregator = NutritionAggregator()
    declared = Recipe(id="r1", title="Chicken", ingredients=[_chicken()], servings=6)
    undeclared = Recipe(id="r2", title="Chicken", ingredients=[_chicken()])
    assert aggregator.estimate_servings_for_recipe(declared) == 6
    assert aggregator.estimate_servings_for_recipe(undeclared) == 1


def test_recipe_payload_with_original_measure() -> None:
    recipe = Recipe.from_payload(
        {
            "id": 7,
            "name": "Rice bowl",
            "readyInMinutes": 20,
            "ingredients": [{"originalName": "rice", "original": "200 g"}],
        }
    )
    assert recipe.title == "Rice bowl"
    assert recipe.ready_in_minutes == 20
    totals = NutritionAggregator().compute_totals(recipe.ingredients)
    assert totals.calories == pytest.approx(260)


BASE_INGREDIENTS = [
    _chicken(),
    Ingredient(name="rice", amount=1, unit="cup"),
    Ingredient(name="unicorn meat", amount=100, unit="g"),
]


@pytest.mark.parametrize("key", sorted(NUTRITION_PER_100G))
def test_adding_matched_ingredient_never_lowers_totals(key: str) -> None:
    aggregator = NutritionAggregator()
    before = aggregator.compute_totals(BASE_INGREDIENTS)
    after = aggregator.compute_totals(
        [*BASE_INGREDIENTS, Ingredient(name=key, amount=150, unit="g")]
    )
    assert after.calories >= before.calories
    assert after.protein >= before.protein
    assert after.carbs >= before.carbs
    assert after.fats >= before.fats


@pytest.mark.parametrize(
    "ingredients",
    [
        [],
        [Ingredient(name="salt", amount=1, unit="tsp")],
        [Ingredient(name="eggs", amount=60)],
        [Ingredient(name="bread", amount=100, unit="slices")],
        [_chicken(20_000)],
        [Ingredient(name="unicorn meat", original="9" * 400 + "/1 cup")],
    ],
)
def test_serving_estimate_stays_in_range(ingredients: list[Ingredient]) -> None:
    servings = NutritionAggregator().estimate_servings(ingredients)
    assert isinstance(servings, int)
    assert 1 <= servings <= MAX_SERVINGS


def test_aggregation_leaves_ingredients_untouched() -> None:
    ingredients = list(BASE_INGREDIENTS)
    aggregator = NutritionAggregator()
    first = aggregator.compute_totals(ingredients)
    assert aggregator.compute_totals(ingredients) == first
    assert ingredients == BASE_INGREDIENTS
