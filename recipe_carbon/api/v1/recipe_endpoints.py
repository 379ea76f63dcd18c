"""
Recipe Lookup API Endpoints

Provides endpoints for:
- Searching recipes by free-text query
- Fetching recipe details scored for carbon footprint
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...core.config import settings
from ...schemas.recipe_schemas import RecipeDetailResponse, RecipeSearchResponse
from ...services.carbon_estimator import carbon_estimator
from ...services.highlights_service import highlights_service
from ...services.recipe_client import (
    RecipeLookupError,
    RecipeLookupNotConfiguredError,
    RecipeQuotaExceededError,
    SpoonacularClient,
    extract_instructions,
    strip_html,
)

router = APIRouter(prefix="/recipes", tags=["Recipes"])
logger = logging.getLogger(__name__)


def get_recipe_client() -> Optional[SpoonacularClient]:
    """Build a lookup client from settings; None when no API key is set."""
    try:
        return SpoonacularClient.from_settings(settings)
    except RecipeLookupNotConfiguredError:
        return None


@router.get(
    "/search",
    response_model=RecipeSearchResponse,
    summary="Search recipes",
    description="Search the recipe API by free-text query. Returns up to 12 recipes."
)
async def search_recipes(
    q: Optional[str] = Query(default=None, description="Search query, e.g. 'pasta'"),
    client: Optional[SpoonacularClient] = Depends(get_recipe_client),
):
    """Proxy a recipe search without exposing the API key."""
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter required")
    if client is None:
        raise HTTPException(status_code=500, detail="API key not configured")

    try:
        data = await client.search_recipes(q.strip())
    except RecipeQuotaExceededError:
        raise HTTPException(status_code=402, detail="Spoonacular API limit reached.")
    except RecipeLookupError:
        logger.exception("Recipe search failed for %r", q)
        raise HTTPException(status_code=500, detail="Failed to search recipes")

    return RecipeSearchResponse(results=data["results"], total_results=data["totalResults"])


@router.get(
    "/{recipe_id}",
    response_model=RecipeDetailResponse,
    response_model_exclude_none=True,
    summary="Get recipe details with carbon score",
    description="""
    Fetch a recipe and its instructions, then:
    1. Estimates the carbon footprint of every ingredient
    2. Totals the recipe and assigns a low / medium / high carbon level
    3. Suggests a lower-carbon swap for the worst ingredient, if any
    4. Adds up to three generated highlights
    """
)
async def get_recipe_details(
    recipe_id: int,
    client: Optional[SpoonacularClient] = Depends(get_recipe_client),
):
    """Get recipe details enriched with carbon scoring."""
    logger.info("Fetching recipe details for ID: %s", recipe_id)
    if client is None:
        raise HTTPException(status_code=500, detail="API key not configured")

    try:
        recipe, instructions = await client.get_recipe_information(recipe_id)
    except RecipeQuotaExceededError:
        raise HTTPException(status_code=402, detail="Spoonacular API limit reached.")
    except RecipeLookupError:
        logger.exception("Recipe details failed for %s", recipe_id)
        raise HTTPException(status_code=500, detail="Failed to fetch recipe details")

    carbon = carbon_estimator.estimate(recipe.get("extendedIngredients") or [])
    summary = strip_html(recipe.get("summary"))
    highlights = await highlights_service.generate(summary)

    return RecipeDetailResponse(
        id=recipe.get("id") or recipe_id,
        title=recipe.get("title"),
        image=recipe.get("image"),
        ready_in_minutes=recipe.get("readyInMinutes") or 30,
        servings=recipe.get("servings") or 4,
        summary=summary,
        ingredients=carbon.processed_ingredients,
        instructions=extract_instructions(instructions),
        total_carbon_score=carbon.total_carbon,
        carbon_level=carbon.carbon_level,
        suggestion=carbon.suggestion,
        highlights=highlights
    )
