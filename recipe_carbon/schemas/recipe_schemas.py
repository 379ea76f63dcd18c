"""
Pydantic schemas for the recipe lookup endpoints.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .carbon_schemas import CamelModel, CarbonLevel, EstimatedIngredient, Suggestion


class RecipeSearchResponse(CamelModel):
    """Search results passed through from the recipe API."""
    results: List[Dict[str, Any]] = Field(default_factory=list)
    total_results: int = 0


class RecipeDetailResponse(CamelModel):
    """Recipe details enriched with carbon scoring and highlights."""
    id: Union[int, str]
    title: Optional[str] = None
    image: Optional[str] = None
    ready_in_minutes: int = 30
    servings: int = 4
    summary: str = ""
    ingredients: List[EstimatedIngredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)
    total_carbon_score: float = 0.0
    carbon_level: CarbonLevel = CarbonLevel.LOW
    suggestion: Optional[Suggestion] = None
    highlights: List[str] = Field(default_factory=list)
