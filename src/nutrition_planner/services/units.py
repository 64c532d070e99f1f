"""Quantity parsing and conversion of weight, volume and count units to grams."""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nutrition_planner.domain.nutrition import Quantity
from nutrition_planner.services.facts import NutritionFactsTable

WEIGHT_UNITS: Mapping[str, float] = MappingProxyType(
    {
        "g": 1,
        "gram": 1,
        "grams": 1,
        "kg": 1000,
        "kilogram": 1000,
        "kilograms": 1000,
        "lb": 453.592,
        "lbs": 453.592,
        "pound": 453.592,
        "pounds": 453.592,
        "oz": 28.3495,
        "ounce": 28.3495,
        "ounces": 28.3495,
    }
)

VOLUME_UNITS_ML: Mapping[str, float] = MappingProxyType(
    {
        "ml": 1,
        "milliliter": 1,
        "milliliters": 1,
        "l": 1000,
        "liter": 1000,
        "liters": 1000,
        "cup": 236.588,
        "cups": 236.588,
        "tbsp": 14.7868,
        "tablespoon": 14.7868,
        "tablespoons": 14.7868,
        "tsp": 4.92892,
        "teaspoon": 4.92892,
        "teaspoons": 4.92892,
        "fl oz": 29.5735,
    }
)

COUNT_UNITS: frozenset[str] = frozenset(
    {
        "pcs",
        "pc",
        "piece",
        "pieces",
        "unit",
        "units",
        "clove",
        "cloves",
        "slice",
        "slices",
        "egg",
        "eggs",
        "can",
        "cans",
        "tin",
        "tins",
        "jar",
        "jars",
        "carton",
        "cartons",
        "packet",
        "packets",
        "pack",
        "packs",
        "pouch",
        "pouches",
        "pocket",
        "pockets",
    }
)

DENSITY_G_PER_ML: Mapping[str, float] = MappingProxyType(
    {
        "water": 1.0,
        "milk": 1.03,
        "olive oil": 0.91,
        "butter": 0.911,
        "flour": 0.53,
        "sugar": 0.85,
        "rice": 0.85,
        "pasta": 0.7,
    }
)

COUNT_WEIGHTS_G: Mapping[str, float] = MappingProxyType(
    {
        "egg": 50,
        "eggs": 50,
        "clove": 3,
        "cloves": 3,
        "slice": 25,
        "slices": 25,
        "onion": 110,
        "tomato": 120,
    }
)

_MIXED_FRACTION = re.compile(r"^(\d+)\s+(\d+)/(\d+)(.*)$", re.DOTALL)
_SIMPLE_FRACTION = re.compile(r"^(\d+)/(\d+)(.*)$", re.DOTALL)
_NUMBER_FIRST = re.compile(r"^(\d+(?:\.\d+)?)(.*)$", re.DOTALL)
_MIN_AMOUNT = 0.0001


def parse_quantity_unit(text: str | None) -> Quantity:
    """Split a free-text measure such as "1 1/2 cups" into amount and unit.

    Text without a leading number is returned whole as the unit so callers can
    still infer a category from it. Amounts too large for a float become 0.
    """
    if not text:
        return Quantity(amount=0.0, unit="")
    measure = str(text).strip()
    if not measure:
        return Quantity(amount=0.0, unit="")

    mixed = _MIXED_FRACTION.match(measure)
    simple = _SIMPLE_FRACTION.match(measure)
    number = _NUMBER_FIRST.match(measure)
    if mixed:
        whole, numerator, denominator, rest = mixed.groups()
        amount = float(whole) + _divide(numerator, denominator)
    elif simple:
        numerator, denominator, rest = simple.groups()
        amount = _divide(numerator, denominator)
    elif number:
        value, rest = number.groups()
        amount = float(value)
    else:
        return Quantity(amount=0.0, unit=measure)

    if not math.isfinite(amount):
        amount = 0.0
    return Quantity(amount=amount, unit=rest.strip())


def _divide(numerator: str, denominator: str) -> float:
    return float(numerator) / (float(denominator) or 1.0)


@dataclass(frozen=True)
class UnitConverter:
    """Converts recipe quantities into grams."""

    facts: NutritionFactsTable = field(default_factory=NutritionFactsTable)

    def to_grams(
        self,
        amount: float | None,
        unit: str | None,
        ingredient_name: str | None,
        original: str | None = None,
    ) -> float:
        """Return the weight in grams, or 0 when the measure can't be resolved."""
        value = amount or 0.0
        raw_unit = unit or ""
        if value <= _MIN_AMOUNT and original:
            parsed = parse_quantity_unit(original)
            value = parsed.amount or value
            raw_unit = parsed.unit or raw_unit
        normalized_unit = raw_unit.lower().strip()
        if not math.isfinite(value) or value <= 0:
            return 0.0
        grams = self._grams(value, normalized_unit, ingredient_name)
        return grams if math.isfinite(grams) else 0.0

    def _grams(
        self, value: float, normalized_unit: str, ingredient_name: str | None
    ) -> float:
        if normalized_unit in WEIGHT_UNITS:
            return value * WEIGHT_UNITS[normalized_unit]

        if normalized_unit in COUNT_UNITS or not normalized_unit:
            name = (ingredient_name or "").lower().strip()
            return value * _count_weight(name, normalized_unit)

        if normalized_unit in VOLUME_UNITS_ML:
            millilitres = value * VOLUME_UNITS_ML[normalized_unit]
            key = self.facts.match_fact_key(ingredient_name) or "water"
            density = DENSITY_G_PER_ML.get(key, DENSITY_G_PER_ML["water"])
            return millilitres * density

        return 0.0


def _count_weight(name: str, unit: str) -> float:
    """Typical weight of one counted item, falling back to container defaults."""
    weight = COUNT_WEIGHTS_G.get(name) or COUNT_WEIGHTS_G.get(unit, 0.0)
    if weight:
        return weight
    if "can" in unit or "tin" in unit:
        if "bean" in name:
            return 240
        if "tomato" in name:
            return 400
        return 300
    if "jar" in unit or "carton" in unit:
        return 350
    if any(word in unit for word in ("packet", "pack", "pouch", "pocket")):
        if any(word in name for word in ("grain", "rice", "pasta")):
            return 250
        if "veg" in name:
            return 300
        return 200
    return 0.0
