"""Supabase repository for stored recipes."""

import json
from dataclasses import dataclass

from supabase import Client

from nutrition_planner.domain.recipes import Recipe
from nutrition_planner.services.planner import RecipeRepository

_COLUMNS = "id, title, servings, ready_in_minutes, ingredients"


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed, read-only recipe access."""

    client: Client

    def list_recipes(self, limit: int) -> list[Recipe]:
        """Return stored recipes, newest first."""
        response = (
            self.client.table("recipes")
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: str) -> Recipe | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select(_COLUMNS)
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])


def _parse_recipe(row: dict[str, object]) -> Recipe:
    """Parse a recipe row, decoding the ingredients column if stored as text."""
    ingredients = row.get("ingredients")
    if isinstance(ingredients, str):
        ingredients = json.loads(ingredients) if ingredients else []
    return Recipe.from_payload({**row, "ingredients": ingredients or []})
