"""
Static reference data for recipe carbon estimation.

Data Sources:
- Carbon intensity: published farm-to-retail averages, rounded
- Unit weights: rough kitchen approximations (volume and count units are
  treated as if every ingredient had the same density / piece size)

Every table here is an ordered tuple of (keyword, value) pairs. Lookups scan
in declaration order and the first keyword contained in the ingredient name
(or unit) wins, so overlapping keywords must be placed deliberately:
"milk" precedes "butter", so "buttermilk" resolves to milk.

Carbon Intensity Reference (kg CO2e per kg of food):
- Beef: 60.0
- Lamb: 24.0
- Butter: 23.8
- Shrimp: 18.0
- Cheese: 13.5
- Vegetables: 0.3-3.3
"""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


# (keyword, kg CO2e per kg of ingredient)
CarbonFactor = Tuple[str, float]

# (unit keywords, kg per unit)
UnitWeightRule = Tuple[Tuple[str, ...], float]


class LowCarbonAlternative(BaseModel):
    """A canned substitute for a high-carbon ingredient."""
    model_config = ConfigDict(frozen=True)

    alternative: str
    # Pre-computed constant, not derived from the recipe's actual footprint
    carbon_saving: float


DEFAULT_CARBON_INTENSITY = 1.0
DEFAULT_UNIT = "piece"

# Single-ingredient footprint above which a swap is suggested
SUGGESTION_THRESHOLD = 5.0

# Recipe total thresholds for carbon level badges
CARBON_LEVEL_THRESHOLDS = {
    "medium": 5.0,
    "high": 15.0,
}

CARBON_FACTORS: Tuple[CarbonFactor, ...] = (
    # =========================================================================
    # MEAT & DAIRY
    # =========================================================================
    ("beef", 60.0),
    ("lamb", 24.0),
    ("pork", 7.6),
    ("chicken", 6.1),
    ("turkey", 10.9),
    ("cheese", 13.5),
    ("milk", 3.2),
    ("butter", 23.8),
    ("eggs", 4.2),

    # =========================================================================
    # FISH & SEAFOOD
    # =========================================================================
    ("salmon", 11.9),
    ("tuna", 6.1),
    ("shrimp", 18.0),
    ("cod", 2.8),

    # =========================================================================
    # VEGETABLES & FRUITS
    # =========================================================================
    ("potatoes", 0.3),
    ("carrots", 0.4),
    ("onions", 0.3),
    ("tomatoes", 2.1),
    ("broccoli", 2.0),
    ("spinach", 2.0),
    ("mushrooms", 3.3),
    ("apples", 0.4),
    ("bananas", 0.7),

    # =========================================================================
    # GRAINS & LEGUMES
    # =========================================================================
    ("rice", 2.7),
    ("wheat", 1.4),
    ("pasta", 1.1),
    ("bread", 1.3),
    ("lentils", 0.9),
    ("beans", 2.0),
    ("tofu", 3.0),

    # =========================================================================
    # OILS & PANTRY
    # =========================================================================
    ("olive oil", 6.3),
    ("vegetable oil", 3.8),
    ("coconut oil", 6.4),
    ("sugar", 1.8),
    ("flour", 1.4),
)

# Approximate kg per unit. "g" sits after "lb"/"oz" so "lbs" never reaches it,
# but it still catches any unit containing a g ("large", "serving").
UNIT_WEIGHT_RULES: Tuple[UnitWeightRule, ...] = (
    (("cup",), 0.25),
    (("tablespoon", "tbsp"), 0.015),
    (("teaspoon", "tsp"), 0.005),
    (("oz",), 0.028),
    (("lb",), 0.45),
    (("g",), 0.001),
    (("piece", "item", "clove", "slice"), 0.1),
)

LOW_CARBON_ALTERNATIVES: Tuple[Tuple[str, LowCarbonAlternative], ...] = (
    ("beef", LowCarbonAlternative(alternative="mushrooms (portobello)", carbon_saving=56.7)),
    ("lamb", LowCarbonAlternative(alternative="lentils", carbon_saving=23.1)),
    ("pork", LowCarbonAlternative(alternative="tofu", carbon_saving=4.6)),
    ("chicken", LowCarbonAlternative(alternative="chickpeas", carbon_saving=4.1)),
    ("cheese", LowCarbonAlternative(alternative="nutritional yeast", carbon_saving=12.5)),
    ("butter", LowCarbonAlternative(alternative="avocado", carbon_saving=22.8)),
    ("shrimp", LowCarbonAlternative(alternative="mushrooms", carbon_saving=14.7)),
    ("salmon", LowCarbonAlternative(alternative="tofu", carbon_saving=8.9)),
)


class CarbonReferenceTables(BaseModel):
    """
    Immutable bundle of every table and threshold the estimator needs.

    Built once at import time; pass a custom instance to CarbonEstimator
    to score against different reference data.
    """
    model_config = ConfigDict(frozen=True)

    carbon_factors: Tuple[CarbonFactor, ...] = CARBON_FACTORS
    unit_weight_rules: Tuple[UnitWeightRule, ...] = UNIT_WEIGHT_RULES
    alternatives: Tuple[Tuple[str, LowCarbonAlternative], ...] = LOW_CARBON_ALTERNATIVES
    default_intensity: float = DEFAULT_CARBON_INTENSITY
    default_unit: str = DEFAULT_UNIT
    suggestion_threshold: float = SUGGESTION_THRESHOLD
    medium_threshold: float = Field(default=CARBON_LEVEL_THRESHOLDS["medium"])
    high_threshold: float = Field(default=CARBON_LEVEL_THRESHOLDS["high"])


DEFAULT_CARBON_TABLES = CarbonReferenceTables()


def find_first_keyword(text: str, table) -> Optional[tuple]:
    """
    Return the first (keyword, value) entry whose keyword is a substring of text.

    Args:
        text: Lowercased ingredient name
        table: Ordered tuple of (keyword, value) pairs

    Returns:
        The matching entry, or None if no keyword is contained in text
    """
    for entry in table:
        if entry[0] in text:
            return entry
    return None


def get_unit_multiplier(unit: str, rules: Tuple[UnitWeightRule, ...] = UNIT_WEIGHT_RULES) -> float:
    """
    Get the kg-per-unit multiplier for a unit string.
    The first rule with any keyword contained in the unit wins; unknown
    units return 1.0 so the amount passes through unscaled.
    """
    normalized_unit = unit.lower()
    for keywords, multiplier in rules:
        if any(keyword in normalized_unit for keyword in keywords):
            return multiplier
    return 1.0
