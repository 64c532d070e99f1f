"""FastAPI application factory."""

import logging
from dataclasses import asdict
from uuid import UUID

from fastapi import Depends, FastAPI, HTTPException, Query, Request, status

from nutrition_planner.api.auth import require_api_token
from nutrition_planner.api.models import (
    IngredientPayload,
    RecipePayload,
    RecommendationPayload,
)
from nutrition_planner.app_logging import configure_logging
from nutrition_planner.containers import AppContainer
from nutrition_planner.domain.inventory import RecipeAvailability
from nutrition_planner.services.matching import (
    AvailabilityFilter,
    format_availability_status,
    get_shopping_suggestions,
)
from nutrition_planner.services.recommendations import (
    format_recommendations,
    quick_suggestions,
)
from nutrition_planner.services.units import parse_quantity_unit


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.debug)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container
    protected = [Depends(require_api_token)]

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/nutrition/recipe", dependencies=protected)
    async def recipe_nutrition(
        payload: RecipePayload, request: Request
    ) -> dict[str, object]:
        """Return totals and per-serving macros for a recipe."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.nutrition.summarize_recipe(payload.to_domain())
        if summary is None:
            return {
                "totals": None,
                "per_serving": None,
                "servings": payload.servings or 1,
                "servings_estimated": False,
            }
        return asdict(summary)

    @app.post("/nutrition/ingredients/grams", dependencies=protected)
    async def ingredient_grams(
        payload: IngredientPayload, request: Request
    ) -> dict[str, object]:
        """Convert one ingredient measure into grams."""
        state_container: AppContainer = request.app.state.container
        ingredient = payload.to_domain()
        grams = state_container.converter.to_grams(
            ingredient.amount, ingredient.unit, ingredient.name, ingredient.original
        )
        parsed = (
            asdict(parse_quantity_unit(ingredient.original))
            if ingredient.original
            else None
        )
        return {
            "name": ingredient.name,
            "parsed": parsed,
            "grams": grams,
            "fact_key": state_container.nutrition.facts.match_fact_key(
                ingredient.name
            ),
        }

    @app.get("/users/{user_id}/recipes/availability", dependencies=protected)
    async def recipes_availability(
        user_id: UUID,
        request: Request,
        mode: AvailabilityFilter = AvailabilityFilter.ALL,
        max_missing: int = Query(default=3, ge=0),
    ) -> dict[str, object]:
        """Return stored recipes ranked by inventory availability."""
        state_container: AppContainer = request.app.state.container
        try:
            entries = state_container.planner_service.browse(
                user_id, mode=mode, max_missing=max_missing
            )
        except Exception as exc:
            logger.exception("Failed to load recipes", extra={"user_id": user_id})
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {
            "recipes": [
                {
                    "recipe_id": entry.recipe.id,
                    "title": entry.recipe.title,
                    "status": format_availability_status(entry.availability),
                    "availability": asdict(entry.availability),
                }
                for entry in entries
            ]
        }

    @app.get(
        "/users/{user_id}/recipes/{recipe_id}/availability", dependencies=protected
    )
    async def recipe_availability(
        user_id: UUID, recipe_id: str, request: Request
    ) -> dict[str, object]:
        """Return availability of one stored recipe."""
        state_container: AppContainer = request.app.state.container
        try:
            availability = state_container.planner_service.availability(
                user_id, recipe_id
            )
        except Exception as exc:
            logger.exception(
                "Failed to compute availability", extra={"recipe_id": recipe_id}
            )
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        if availability is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _availability_payload(availability)

    @app.get("/users/{user_id}/shopping-list", dependencies=protected)
    async def shopping_list(
        user_id: UUID,
        request: Request,
        recipe_id: list[str] | None = Query(default=None),
    ) -> dict[str, object]:
        """Return missing ingredients merged across recipes not yet cookable."""
        state_container: AppContainer = request.app.state.container
        try:
            items = state_container.planner_service.shopping_list(user_id, recipe_id)
        except Exception as exc:
            logger.exception(
                "Failed to build shopping list", extra={"user_id": user_id}
            )
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {"items": [asdict(item) for item in items]}

    @app.post("/recommendations", dependencies=protected)
    async def recommendations(
        payload: RecommendationPayload, request: Request
    ) -> dict[str, object]:
        """Return portion-scaled meal suggestions for the remaining targets."""
        state_container: AppContainer = request.app.state.container
        meal_request = payload.to_domain()
        recs = state_container.recommendations.generate(meal_request)
        return {
            "recommendations": [asdict(rec) for rec in recs],
            "quick_suggestions": quick_suggestions(
                meal_request.remaining_targets, meal_request.time_of_day
            ),
            "message": format_recommendations(recs),
        }

    return app


def _availability_payload(availability: RecipeAvailability) -> dict[str, object]:
    return {
        **asdict(availability),
        "status": format_availability_status(availability),
        "shopping_suggestions": get_shopping_suggestions(availability),
    }
