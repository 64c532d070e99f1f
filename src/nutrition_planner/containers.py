"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_planner.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from nutrition_planner.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from nutrition_planner.config import Settings
from nutrition_planner.services.facts import NutritionFactsTable
from nutrition_planner.services.matching import InventoryMatcher
from nutrition_planner.services.nutrition import NutritionAggregator
from nutrition_planner.services.planner import PlannerService
from nutrition_planner.services.recommendations import MealRecommendationEngine
from nutrition_planner.services.units import UnitConverter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    converter: UnitConverter
    nutrition: NutritionAggregator
    matcher: InventoryMatcher
    recommendations: MealRecommendationEngine
    planner_service: PlannerService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    facts = NutritionFactsTable()
    converter = UnitConverter(facts)
    matcher = InventoryMatcher(debug=resolved_settings.debug)
    planner_service = PlannerService(
        inventory_repository=SupabaseInventoryRepository(supabase_client),
        recipe_repository=SupabaseRecipeRepository(supabase_client),
        matcher=matcher,
        recipe_limit=resolved_settings.recipe_limit,
    )
    return AppContainer(
        settings=resolved_settings,
        converter=converter,
        nutrition=NutritionAggregator(
            facts=facts, converter=converter, debug=resolved_settings.debug
        ),
        matcher=matcher,
        recommendations=MealRecommendationEngine(
            limit=resolved_settings.recommendation_limit
        ),
        planner_service=planner_service,
    )
