"""
Services module for the recipe carbon API.
Contains carbon estimation, recipe lookup, and highlight generation.
"""

from .carbon_estimator import CarbonEstimator
from .highlights_service import HighlightsService
from .recipe_client import SpoonacularClient

__all__ = [
    "CarbonEstimator",
    "HighlightsService",
    "SpoonacularClient"
]
