"""Static per-100g nutrition facts with synonym resolution."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from nutrition_planner.domain.nutrition import MacroProfile

NUTRITION_PER_100G: Mapping[str, MacroProfile] = MappingProxyType(
    {
        # proteins
        "chicken breast": MacroProfile(165, 31, 0, 3.6),
        "chicken": MacroProfile(215, 27, 0, 12),
        "beef": MacroProfile(250, 26, 0, 17),
        "egg": MacroProfile(155, 13, 1.1, 11),
        "egg yolk": MacroProfile(322, 16, 3.6, 27),
        "egg white": MacroProfile(52, 11, 0.7, 0.2),
        "milk": MacroProfile(42, 3.4, 5, 1),
        # carbs and staples
        "rice": MacroProfile(130, 2.7, 28, 0.3),
        "pasta": MacroProfile(131, 5, 25, 1.1),
        "flour": MacroProfile(364, 10, 76, 1),
        "sugar": MacroProfile(387, 0, 100, 0),
        "bread": MacroProfile(265, 9, 49, 3.2),
        "potato": MacroProfile(77, 2, 17, 0.1),
        # oils and fats
        "olive oil": MacroProfile(884, 0, 0, 100),
        "butter": MacroProfile(717, 0.9, 0.1, 81),
        # vegetables and aromatics
        "onion": MacroProfile(40, 1.1, 9.3, 0.1),
        "garlic": MacroProfile(149, 6.4, 33, 0.5),
        "tomato": MacroProfile(18, 0.9, 3.9, 0.2),
        "chopped tomatoes": MacroProfile(24, 1.2, 5.3, 0.2),
        "bell pepper": MacroProfile(31, 1, 6, 0.3),
        "carrot": MacroProfile(41, 0.9, 10, 0.2),
        "broccoli": MacroProfile(34, 2.8, 7, 0.4),
        # legumes, cooked or canned
        "kidney beans": MacroProfile(127, 8.7, 22.8, 0.5),
        "beans": MacroProfile(110, 7, 20, 0.5),
        "mixed vegetables": MacroProfile(72, 3, 12, 0.5),
        "mixed grains": MacroProfile(130, 4.5, 24, 1.5),
        # dairy and cheese
        "cheddar cheese": MacroProfile(403, 25, 1.3, 33),
        "mozzarella": MacroProfile(280, 28, 3, 17),
        "parmesan": MacroProfile(431, 38, 4.1, 29),
        # seasoning, per 100g dried
        "salt": MacroProfile(0, 0, 0, 0),
        "black pepper": MacroProfile(251, 10, 64, 3.3),
    }
)

ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "extra virgin olive oil": "olive oil",
        "onions": "onion",
        "garlic clove": "garlic",
        "garlic cloves": "garlic",
        "tomatoes": "tomato",
        "canned tomatoes": "chopped tomatoes",
        "chopped tomato": "chopped tomatoes",
        "red onion": "onion",
        "yellow onion": "onion",
        "white onion": "onion",
        "parmigiano reggiano": "parmesan",
        "mozzarella cheese": "mozzarella",
        "cheddar": "cheddar cheese",
        "kidney bean": "kidney beans",
        "canned kidney beans": "kidney beans",
        "mixed veg": "mixed vegetables",
    }
)


@dataclass(frozen=True)
class NutritionFactsTable:
    """Read-only lookup of per-100g macros keyed by canonical ingredient name."""

    facts: Mapping[str, MacroProfile] = field(
        default_factory=lambda: NUTRITION_PER_100G
    )
    aliases: Mapping[str, str] = field(default_factory=lambda: ALIASES)

    def resolve_alias(self, name: str | None) -> str:
        """Lowercase and trim a name, then map it through the alias table."""
        normalized = (name or "").lower().strip()
        return self.aliases.get(normalized, normalized)

    def match_fact_key(self, name: str | None) -> str | None:
        """Return the facts key for an ingredient name, if any.

        Exact matches win; otherwise the first key contained in the resolved
        name is used so phrases like "boneless chicken thighs" still resolve.
        """
        resolved = self.resolve_alias(name)
        if not resolved:
            return None
        if resolved in self.facts:
            return resolved
        for key in self.facts:
            if key in resolved:
                return key
        return None

    def lookup(self, name: str | None) -> MacroProfile | None:
        """Return per-100g macros for an ingredient name."""
        key = self.match_fact_key(name)
        if key is None:
            return None
        return self.facts[key]
