"""
Pydantic schemas for recipe carbon estimation.
Python attributes are snake_case; the JSON wire format uses camelCase aliases.
"""

import math
from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Enums
# =============================================================================

class CarbonLevel(str, Enum):
    """Recipe-level carbon impact tier."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# Input Models
# =============================================================================

class RawIngredient(CamelModel):
    """
    Ingredient record as returned by the recipe API's extendedIngredients.

    Every field is optional and degenerate values are coerced to None
    rather than rejected, so any upstream payload can be scored.
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "id": 23572,
                "name": "beef chuck roast",
                "originalName": "2 lbs beef chuck roast",
                "amount": 2,
                "unit": "lbs"
            }
        },
    )

    id: Optional[Union[int, str]] = None
    name: Optional[str] = None
    original_name: Optional[str] = None
    amount: Optional[float] = None
    unit: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, str)):
            return None
        return v

    @field_validator("name", "original_name", "unit", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Optional[float]:
        """Drop amounts that are not finite numbers."""
        if isinstance(v, bool):
            return None
        try:
            amount = float(v)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(amount):
            return None
        return amount


# =============================================================================
# Output Models
# =============================================================================

class EstimatedIngredient(CamelModel):
    """Carbon estimate for a single ingredient."""
    id: Union[int, str]
    name: str
    amount: float
    unit: str
    carbon_footprint: float = Field(..., ge=0, description="Estimated kg CO2e, rounded to 2 decimals")


class Suggestion(CamelModel):
    """Lower-carbon swap for the recipe's highest-footprint ingredient."""
    original_ingredient: str
    suggested_ingredient: str
    carbon_saving: float = Field(..., description="Static kg CO2e saving for this swap")


class RecipeCarbonResult(CamelModel):
    """Full carbon estimate for one ingredient list."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "processedIngredients": [
                    {"id": 23572, "name": "beef chuck roast", "amount": 2, "unit": "lbs", "carbonFootprint": 54.0}
                ],
                "totalCarbon": 54.0,
                "carbonLevel": "high",
                "suggestion": {
                    "originalIngredient": "beef chuck roast",
                    "suggestedIngredient": "mushrooms (portobello)",
                    "carbonSaving": 56.7
                }
            }
        }
    )

    processed_ingredients: List[EstimatedIngredient] = Field(default_factory=list)
    total_carbon: float = Field(default=0.0, description="Summed kg CO2e, rounded once to 2 decimals")
    carbon_level: CarbonLevel = CarbonLevel.LOW
    suggestion: Optional[Suggestion] = None
