"""
Carbon Estimator Service

Estimates the carbon footprint of a recipe from its raw ingredient list.
Takes ingredient records as returned by the recipe API and returns
per-ingredient footprints, a recipe total, a carbon level, and an optional
lower-carbon swap.
"""

import logging
import math
import sys
from typing import Any, Iterable, Optional, Tuple, Union

from ..data.carbon_factors import (
    DEFAULT_CARBON_TABLES,
    CarbonReferenceTables,
    LowCarbonAlternative,
    find_first_keyword,
    get_unit_multiplier,
)
from ..schemas.carbon_schemas import (
    CarbonLevel,
    EstimatedIngredient,
    RawIngredient,
    RecipeCarbonResult,
    Suggestion,
)

logger = logging.getLogger(__name__)

UNKNOWN_MATCH_NAME = "unknown"
UNKNOWN_DISPLAY_NAME = "Unknown ingredient"


def round_half_up(value: float) -> float:
    """
    Round to 2 decimals, halves going up (0.125 -> 0.13).

    Overflowed footprints are clamped to the largest finite float so the
    result stays JSON-serializable; NaN becomes 0.0.
    """
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return math.copysign(sys.float_info.max, value)
    scaled = value * 100 + 0.5
    if math.isinf(scaled):
        # Past ~1e306 cents are below float precision anyway
        return value
    return math.floor(scaled) / 100


class CarbonEstimator:
    """
    Service for estimating the carbon footprint of recipe ingredients.

    Pure and stateless: the reference tables are immutable and injected at
    construction, so one instance can serve concurrent requests.
    """

    def __init__(self, tables: CarbonReferenceTables = DEFAULT_CARBON_TABLES):
        self.tables = tables

    def match_carbon_intensity(self, name: str) -> Tuple[Optional[str], float]:
        """
        Find the carbon intensity for a lowercased ingredient name.

        Returns:
            Tuple of (matched keyword or None, kg CO2e per kg)
        """
        entry = find_first_keyword(name, self.tables.carbon_factors)
        if entry is None:
            return None, self.tables.default_intensity
        return entry

    def estimate_weight_kg(self, amount: float, unit: str) -> float:
        """Convert a recipe quantity into an approximate weight in kg."""
        return amount * get_unit_multiplier(unit, self.tables.unit_weight_rules)

    def find_alternative(self, name: str) -> Optional[Tuple[str, LowCarbonAlternative]]:
        """Find a lower-carbon substitute for a lowercased ingredient name."""
        return find_first_keyword(name, self.tables.alternatives)

    def carbon_level(self, total_carbon: float) -> CarbonLevel:
        """Map a recipe total onto low / medium / high."""
        if total_carbon > self.tables.high_threshold:
            return CarbonLevel.HIGH
        if total_carbon > self.tables.medium_threshold:
            return CarbonLevel.MEDIUM
        return CarbonLevel.LOW

    def estimate(
        self,
        ingredients: Iterable[Union[RawIngredient, Any]]
    ) -> RecipeCarbonResult:
        """
        Estimate the carbon footprint for a list of ingredients.

        Args:
            ingredients: RawIngredient objects or raw extendedIngredients dicts

        Returns:
            RecipeCarbonResult with per-ingredient breakdown, total, level
            and an optional suggestion
        """
        processed = []
        total_carbon = 0.0
        highest: Optional[Tuple[str, float]] = None

        for index, raw in enumerate(ingredients or []):
            ingredient = self._coerce(raw)
            match_name = (ingredient.name or ingredient.original_name or UNKNOWN_MATCH_NAME).lower()

            amount = ingredient.amount
            if not amount or amount < 0:
                amount = 1
            unit = ingredient.unit or self.tables.default_unit

            keyword, intensity = self.match_carbon_intensity(match_name)
            if keyword is None:
                logger.debug("No carbon factor for %r, using default %s", match_name, intensity)

            carbon_footprint = intensity * self.estimate_weight_kg(amount, unit)
            total_carbon += carbon_footprint

            if highest is None or carbon_footprint > highest[1]:
                highest = (match_name, carbon_footprint)

            processed.append(EstimatedIngredient(
                id=ingredient.id or index + 1,
                name=ingredient.name or ingredient.original_name or UNKNOWN_DISPLAY_NAME,
                amount=amount,
                unit=unit,
                carbon_footprint=round_half_up(carbon_footprint)
            ))

        total = round_half_up(total_carbon)

        return RecipeCarbonResult(
            processed_ingredients=processed,
            total_carbon=total,
            carbon_level=self.carbon_level(total),
            suggestion=self._suggest(highest)
        )

    def _suggest(self, highest: Optional[Tuple[str, float]]) -> Optional[Suggestion]:
        if highest is None or highest[1] <= self.tables.suggestion_threshold:
            return None

        name, _ = highest
        match = self.find_alternative(name)
        if match is None:
            return None

        _, alt = match
        return Suggestion(
            original_ingredient=name,
            suggested_ingredient=alt.alternative,
            carbon_saving=round_half_up(alt.carbon_saving)
        )

    @staticmethod
    def _coerce(raw: Any) -> RawIngredient:
        if isinstance(raw, RawIngredient):
            return raw
        if isinstance(raw, dict):
            return RawIngredient.model_validate(raw)
        return RawIngredient()


# Singleton instance for easy import
carbon_estimator = CarbonEstimator()
