"""
Carbon Estimation API Endpoints

Scores an arbitrary ingredient list without touching the recipe API.
"""

from typing import List

from fastapi import APIRouter

from ...schemas.carbon_schemas import RawIngredient, RecipeCarbonResult
from ...services.carbon_estimator import carbon_estimator

router = APIRouter(prefix="/carbon", tags=["Carbon Estimation"])


@router.post(
    "/estimate",
    response_model=RecipeCarbonResult,
    response_model_exclude_none=True,
    summary="Estimate carbon footprint",
    description="""
    Estimate the carbon footprint of a list of ingredients in the recipe API's
    extendedIngredients format. Missing names, amounts and units fall back to
    defaults, so any list can be scored.
    """
)
async def estimate_carbon(ingredients: List[RawIngredient]):
    """Score a list of raw ingredients."""
    return carbon_estimator.estimate(ingredients)


# Health check for this router
@router.get("/health")
async def health_check():
    """Health check for the carbon estimator."""
    return {"status": "healthy", "service": "carbon-estimator"}
