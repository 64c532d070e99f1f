"""Recipe nutrition totals, serving estimation and per-serving macros."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from nutrition_planner.domain.nutrition import MacroProfile, RecipeNutrition
from nutrition_planner.domain.recipes import Ingredient, Recipe
from nutrition_planner.rounding import round_half_up, round_int
from nutrition_planner.services.facts import NutritionFactsTable
from nutrition_planner.services.units import UnitConverter, parse_quantity_unit

MIN_SERVINGS = 1
MAX_SERVINGS = 12
EGGS_PER_SERVING = 2
SLICES_PER_SERVING = 2
PROTEIN_GRAMS_PER_SERVING = 150
CALORIES_PER_SERVING = 600
PROTEIN_KEYWORDS = (
    "chicken",
    "beef",
    "pork",
    "turkey",
    "lamb",
    "fish",
    "salmon",
    "tuna",
    "shrimp",
    "egg",
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServingContext:
    """Inputs shared by the serving estimators."""

    ingredients: Sequence[Ingredient]
    totals: MacroProfile | None
    converter: UnitConverter


ServingEstimator = Callable[[ServingContext], int | None]


def estimate_from_eggs(context: ServingContext) -> int | None:
    """About two eggs per serving."""
    egg_count = 0.0
    for ingredient in context.ingredients:
        if "egg" not in ingredient.name.lower():
            continue
        egg_count += (
            ingredient.amount or parse_quantity_unit(ingredient.original).amount
        )
    if egg_count < EGGS_PER_SERVING:
        return None
    return round_int(egg_count / EGGS_PER_SERVING)


def estimate_from_bread(context: ServingContext) -> int | None:
    """About two slices of bread (or muffins) per serving."""
    slice_count = 0.0
    for ingredient in context.ingredients:
        name = ingredient.name.lower()
        unit = ingredient.unit.lower()
        if "bread" not in name and "muffin" not in name and "slice" not in unit:
            continue
        measure = ingredient.original or f"{ingredient.amount or ''} {ingredient.unit}"
        slice_count += ingredient.amount or parse_quantity_unit(measure).amount
    if slice_count < SLICES_PER_SERVING:
        return None
    return round_int(slice_count / SLICES_PER_SERVING)


def estimate_from_protein_weight(context: ServingContext) -> int | None:
    """About 150g of meat, fish or egg per serving."""
    protein_grams = 0.0
    for ingredient in context.ingredients:
        name = ingredient.name.lower()
        if any(keyword in name for keyword in PROTEIN_KEYWORDS):
            protein_grams += context.converter.to_grams(
                ingredient.amount, ingredient.unit, name, ingredient.original
            )
    if protein_grams <= 0:
        return None
    return round_int(protein_grams / PROTEIN_GRAMS_PER_SERVING)


def estimate_from_calories(context: ServingContext) -> int | None:
    """About 600 kcal per serving for a main dish."""
    calories = context.totals.calories if context.totals else 0.0
    if calories <= 0:
        return None
    return round_int(calories / CALORIES_PER_SERVING)


DEFAULT_ESTIMATORS: tuple[ServingEstimator, ...] = (
    estimate_from_eggs,
    estimate_from_bread,
    estimate_from_protein_weight,
    estimate_from_calories,
)


def combine_estimates(candidates: Sequence[int | None]) -> int:
    """Take the largest non-zero candidate and clamp it to a sane range."""
    usable = [candidate for candidate in candidates if candidate]
    estimate = max(usable) if usable else MIN_SERVINGS
    return min(max(estimate, MIN_SERVINGS), MAX_SERVINGS)


@dataclass
class NutritionAggregator:
    """Computes recipe nutrition from an ingredient list."""

    facts: NutritionFactsTable = field(default_factory=NutritionFactsTable)
    converter: UnitConverter | None = None
    estimators: tuple[ServingEstimator, ...] = DEFAULT_ESTIMATORS
    debug: bool = False

    def __post_init__(self) -> None:
        if self.converter is None:
            self.converter = UnitConverter(self.facts)

    def ingredient_grams(self, ingredient: Ingredient) -> float:
        """Return the weight of one ingredient in grams."""
        return self.converter.to_grams(
            ingredient.amount, ingredient.unit, ingredient.name, ingredient.original
        )

    def compute_totals(self, ingredients: Sequence[Ingredient]) -> MacroProfile | None:
        """Sum nutrition over all ingredients without dividing into servings.

        Ingredients that can't be weighed or matched to a fact are skipped, so
        the result is a lower bound.
        """
        if not ingredients:
            return None
        total = MacroProfile.zero()
        for ingredient in ingredients:
            grams = self.ingredient_grams(ingredient)
            if grams <= 0:
                if self.debug:
                    _logger.info(
                        "Skipping ingredient without weight: name=%s original=%s",
                        ingredient.name,
                        ingredient.original,
                    )
                continue
            per_100g = self.facts.lookup(ingredient.name)
            if per_100g is None:
                if self.debug:
                    _logger.info("No nutrition facts for %s", ingredient.name)
                continue
            total = total + per_100g.scale(grams / 100)
        return total

    def estimate_servings(
        self,
        ingredients: Sequence[Ingredient],
        totals: MacroProfile | None = None,
    ) -> int:
        """Estimate a serving count for recipes that don't declare one."""
        if not ingredients:
            return MIN_SERVINGS
        context = ServingContext(
            ingredients=ingredients,
            totals=totals or self.compute_totals(ingredients),
            converter=self.converter,
        )
        candidates = [estimator(context) for estimator in self.estimators]
        servings = combine_estimates(candidates)
        if self.debug:
            _logger.info(
                "Serving estimate: candidates=%s servings=%s", candidates, servings
            )
        return servings

    def compute_per_serving(
        self, ingredients: Sequence[Ingredient], servings: int = 1
    ) -> MacroProfile | None:
        """Return per-serving macros rounded for display."""
        if not ingredients:
            return None
        totals = self.compute_totals(ingredients) or MacroProfile.zero()
        return _divide(totals, servings)

    def compute_for_recipe(self, recipe: Recipe) -> MacroProfile | None:
        """Per-serving nutrition for an arbitrary imported recipe."""
        summary = self.summarize_recipe(recipe)
        return summary.per_serving if summary else None

    def estimate_servings_for_recipe(self, recipe: Recipe) -> int:
        """Return the declared serving count, or an estimate when it is missing."""
        if not recipe.ingredients:
            return recipe.servings or MIN_SERVINGS
        if recipe.servings > 1:
            return recipe.servings
        return self.estimate_servings(recipe.ingredients)

    def summarize_recipe(self, recipe: Recipe) -> RecipeNutrition | None:
        """Return totals, per-serving macros and the servings used."""
        if not recipe.ingredients:
            return None
        totals = self.compute_totals(recipe.ingredients) or MacroProfile.zero()
        estimated = recipe.servings <= 1
        servings = (
            self.estimate_servings(recipe.ingredients, totals)
            if estimated
            else recipe.servings
        )
        return RecipeNutrition(
            totals=totals,
            per_serving=_divide(totals, servings),
            servings=servings,
            servings_estimated=estimated,
        )


def _divide(totals: MacroProfile, servings: int) -> MacroProfile:
    divisor = servings if servings and servings > 0 else 1
    return MacroProfile(
        calories=round_int(totals.calories / divisor),
        protein=round_half_up(totals.protein / divisor, 1),
        carbs=round_half_up(totals.carbs / divisor, 1),
        fats=round_half_up(totals.fats / divisor, 1),
    )
