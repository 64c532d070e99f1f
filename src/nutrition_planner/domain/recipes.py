"""Domain models for recipes and their ingredients."""

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ingredient:
    """A recipe ingredient normalized from any supported source shape."""

    name: str
    amount: float = 0.0
    unit: str = ""
    original: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Ingredient":
        """Build an ingredient from a loosely-typed recipe payload.

        Recipe sources disagree on field names: ``amount`` or ``quantity`` for
        the measure and ``name``, ``originalName`` or ``original`` for the label.
        """
        original = str(payload.get("original") or "")
        name = str(
            payload.get("name") or payload.get("originalName") or original or ""
        )
        amount = _to_float(payload.get("amount"))
        if not amount:
            amount = _to_float(payload.get("quantity"))
        return cls(
            name=name.strip(),
            amount=amount,
            unit=str(payload.get("unit") or "").strip(),
            original=original.strip(),
        )


@dataclass(frozen=True)
class Recipe:
    """A recipe with its ingredient list."""

    id: str
    title: str
    ingredients: list[Ingredient] = field(default_factory=list)
    servings: int = 0
    ready_in_minutes: int | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Recipe":
        """Build a recipe from an imported or stored recipe payload."""
        raw_ingredients = payload.get("ingredients") or []
        ingredients = [
            Ingredient.from_payload(item)
            for item in raw_ingredients
            if isinstance(item, dict)
        ]
        ready = payload.get("ready_in_minutes", payload.get("readyInMinutes"))
        return cls(
            id=str(payload.get("id") or ""),
            title=str(payload.get("title") or payload.get("name") or ""),
            ingredients=ingredients,
            servings=int(_to_float(payload.get("servings"))),
            ready_in_minutes=int(ready) if isinstance(ready, int | float) else None,
        )


def _to_float(value: object) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else 0.0
    if isinstance(value, str):
        try:
            parsed = float(value)
        except ValueError:
            return 0.0
        return parsed if math.isfinite(parsed) else 0.0
    return 0.0
