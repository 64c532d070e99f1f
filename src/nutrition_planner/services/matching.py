"""Matching recipe ingredients against the user's inventory."""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Protocol

from nutrition_planner.domain.inventory import (
    InventoryItem,
    MissingIngredient,
    RecipeAvailability,
    RecipeWithAvailability,
)
from nutrition_planner.domain.recipes import Ingredient, Recipe
from nutrition_planner.rounding import round_int

FULL_PERCENTAGE = 100
ALMOST_READY_PERCENTAGE = 75
DEFAULT_REQUIRED_UNIT = "unit"

COMMON_VARIATIONS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "chicken": ("chicken breast", "chicken thigh", "chicken leg"),
        "tomato": ("tomatoes", "cherry tomatoes", "roma tomatoes"),
        "onion": ("onions", "yellow onion", "white onion", "red onion"),
        "garlic": ("garlic cloves", "garlic powder"),
        "cheese": ("cheddar cheese", "mozzarella cheese", "parmesan cheese"),
    }
)

_PUNCTUATION = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_MODIFIERS = re.compile(r"\b(fresh|dried|chopped|sliced|diced|minced|ground)\b")

_logger = logging.getLogger(__name__)


class AvailabilityFilter(StrEnum):
    ALL = "all"
    CAN_MAKE_NOW = "can_make_now"
    MISSING_FEW = "missing_few"


def normalize_ingredient_name(name: str | None) -> str:
    """Lowercase, strip punctuation and cooking modifiers from a name."""
    normalized = (name or "").lower().strip()
    normalized = _PUNCTUATION.sub("", normalized)
    normalized = _MODIFIERS.sub("", normalized)
    return _WHITESPACE.sub(" ", normalized).strip()


class SynonymResolver(Protocol):
    """Supplies known specific variants for a generic ingredient name."""

    def variations_for(self, normalized_name: str) -> list[tuple[str, ...]]:
        """Return variant groups to look for in the inventory, best first."""


@dataclass(frozen=True)
class CommonVariationResolver(SynonymResolver):
    """Resolves generic names using a fixed base-term to variants table."""

    table: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: COMMON_VARIATIONS
    )

    def variations_for(self, normalized_name: str) -> list[tuple[str, ...]]:
        """Return one variant group per base term contained in the name."""
        return [
            variants for base, variants in self.table.items() if base in normalized_name
        ]


@dataclass
class InventoryMatcher:
    """Finds inventory items for recipe ingredients and scores recipes."""

    resolver: SynonymResolver = field(default_factory=CommonVariationResolver)
    debug: bool = False

    def find_inventory_match(
        self, recipe_ingredient_name: str, inventory: Sequence[InventoryItem]
    ) -> InventoryItem | None:
        """Return the best inventory item for an ingredient, or ``None``.

        Resolution order is exact normalized name, then substring in either
        direction, then the resolver's known variants.
        """
        wanted = normalize_ingredient_name(recipe_ingredient_name)
        if not wanted:
            return None
        normalized = [
            (item, normalize_ingredient_name(item.name)) for item in inventory
        ]

        for item, name in normalized:
            if name == wanted:
                return item

        for item, name in normalized:
            if name and (wanted in name or name in wanted):
                return item

        for variations in self.resolver.variations_for(wanted):
            for item, name in normalized:
                if name and any(
                    variation in name or name in variation for variation in variations
                ):
                    return item
        return None

    def calculate_recipe_availability(
        self, recipe: Recipe, inventory: Sequence[InventoryItem]
    ) -> RecipeAvailability:
        """Score how much of a recipe the inventory covers.

        Any matching inventory item counts as enough, whatever its quantity.
        """
        if not recipe.ingredients:
            return RecipeAvailability(
                recipe_id=recipe.id,
                available_ingredients=0,
                total_ingredients=0,
                availability_percentage=0,
                missing_ingredients=[],
                can_cook_now=False,
                recommendation_reason="No ingredients specified",
            )

        available = 0
        missing: list[MissingIngredient] = []
        for ingredient in recipe.ingredients:
            name = ingredient.name or ingredient.original
            if self.find_inventory_match(name, inventory) is not None:
                available += 1
                continue
            if self.debug:
                _logger.info("No inventory match: recipe=%s name=%s", recipe.id, name)
            missing.append(_missing(name, ingredient))

        total = len(recipe.ingredients)
        percentage = round_int(available / total * 100)
        return RecipeAvailability(
            recipe_id=recipe.id,
            available_ingredients=available,
            total_ingredients=total,
            availability_percentage=percentage,
            missing_ingredients=missing,
            can_cook_now=percentage == FULL_PERCENTAGE,
            recommendation_reason=_recommendation_reason(percentage),
        )

    def get_recipes_with_availability(
        self, recipes: Sequence[Recipe], inventory: Sequence[InventoryItem]
    ) -> list[RecipeWithAvailability]:
        """Score recipes, cookable ones first then by coverage."""
        scored = [
            RecipeWithAvailability(
                recipe=recipe,
                availability=self.calculate_recipe_availability(recipe, inventory),
            )
            for recipe in recipes
        ]
        return sorted(
            scored,
            key=lambda entry: (
                not entry.availability.can_cook_now,
                -entry.availability.availability_percentage,
            ),
        )

    def find_recipes_for_ingredients(
        self, ingredient_names: Sequence[str], recipes: Sequence[Recipe]
    ) -> list[Recipe]:
        """Return recipes using any of the ingredients, most matches first."""
        wanted = [
            name for name in map(normalize_ingredient_name, ingredient_names) if name
        ]
        counted = [(recipe, _count_matches(recipe, wanted)) for recipe in recipes]
        matching = [(recipe, count) for recipe, count in counted if count > 0]
        matching.sort(key=lambda pair: -pair[1])
        return [recipe for recipe, _ in matching]


def filter_recipes_by_availability(
    entries: Sequence[RecipeWithAvailability],
    mode: AvailabilityFilter = AvailabilityFilter.ALL,
    max_missing: int = 3,
) -> list[RecipeWithAvailability]:
    """Keep recipes that can be made now or that miss only a few ingredients."""
    if mode == AvailabilityFilter.CAN_MAKE_NOW:
        return [entry for entry in entries if entry.availability.can_cook_now]
    if mode == AvailabilityFilter.MISSING_FEW:
        return [
            entry
            for entry in entries
            if 0 < len(entry.availability.missing_ingredients) <= max_missing
        ]
    return list(entries)


def calculate_total_missing_ingredients(
    entries: Sequence[RecipeWithAvailability],
) -> list[MissingIngredient]:
    """Merge missing ingredients across recipes into one shopping list."""
    merged: dict[tuple[str, str], MissingIngredient] = {}
    for entry in entries:
        for missing in entry.availability.missing_ingredients:
            key = (missing.name.lower(), missing.required_unit.lower())
            existing = merged.get(key)
            if existing is None:
                merged[key] = missing
                continue
            merged[key] = MissingIngredient(
                name=existing.name,
                required_quantity=existing.required_quantity
                + missing.required_quantity,
                required_unit=existing.required_unit,
                available_quantity=existing.available_quantity
                + missing.available_quantity,
                shortfall=existing.shortfall + missing.shortfall,
            )
    return list(merged.values())


def get_shopping_suggestions(availability: RecipeAvailability) -> list[str]:
    """Return one shopping line per missing ingredient."""
    lines = []
    for missing in availability.missing_ingredients:
        if missing.available_quantity > 0:
            lines.append(
                f"{missing.name} (need {_format_number(missing.shortfall)} "
                f"{missing.required_unit} more)"
            )
        else:
            lines.append(
                f"{missing.name} ({_format_number(missing.required_quantity)} "
                f"{missing.required_unit})"
            )
    return lines


def format_availability_status(availability: RecipeAvailability) -> str:
    """Short status label for a recipe card."""
    if availability.can_cook_now:
        return "Ready to cook!"
    missing = len(availability.missing_ingredients)
    plural = "" if missing == 1 else "s"
    return (
        f"{availability.availability_percentage}% available "
        f"({missing} ingredient{plural} needed)"
    )


def _missing(name: str, ingredient: Ingredient) -> MissingIngredient:
    return MissingIngredient(
        name=name,
        required_quantity=ingredient.amount,
        required_unit=ingredient.unit or DEFAULT_REQUIRED_UNIT,
        available_quantity=0.0,
        shortfall=ingredient.amount,
    )


def _recommendation_reason(percentage: int) -> str:
    if percentage == FULL_PERCENTAGE:
        return "You have all ingredients needed for this recipe!"
    if percentage >= ALMOST_READY_PERCENTAGE:
        return f"Almost ready! You have {percentage}% of ingredients."
    return f"You have {percentage}% of ingredients available."


def _count_matches(recipe: Recipe, wanted: Sequence[str]) -> int:
    count = 0
    for ingredient in recipe.ingredients:
        name = normalize_ingredient_name(ingredient.name or ingredient.original)
        if name and any(term in name or name in term for term in wanted):
            count += 1
    return count


def _format_number(value: float) -> str:
    return f"{value:g}"
