"""
Recipe Lookup Client

Thin async proxy around the Spoonacular recipe API. The API key stays on the
server; callers get plain dicts back and typed errors on failure.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.spoonacular.com"
SEARCH_RESULT_COUNT = 12

_HTML_TAG = re.compile(r"<[^>]*>")


class RecipeLookupError(Exception):
    """Recipe API request failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RecipeQuotaExceededError(RecipeLookupError):
    """Recipe API answered 402: the daily point quota is used up."""


class RecipeLookupNotConfiguredError(RecipeLookupError):
    """No Spoonacular API key is configured."""


def strip_html(text: Any) -> str:
    """Remove HTML tags from a recipe summary."""
    if not isinstance(text, str):
        return ""
    return _HTML_TAG.sub("", text)


def extract_instructions(instructions: Any) -> List[str]:
    """Return the step texts of the first analyzed-instruction block."""
    if not isinstance(instructions, list) or not instructions:
        return []
    first = instructions[0]
    if not isinstance(first, dict):
        return []
    steps = first.get("steps") or []
    return [step["step"] for step in steps if isinstance(step, dict) and step.get("step")]


class SpoonacularClient:
    """Async client for recipe search and recipe detail lookups."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise RecipeLookupNotConfiguredError("API key not configured")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings) -> "SpoonacularClient":
        return cls(
            api_key=settings.spoonacular_api_key,
            base_url=settings.spoonacular_base_url,
            timeout=settings.request_timeout_seconds,
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            params={"apiKey": self.api_key},
            headers={"Content-Type": "application/json"},
            transport=self.transport,
        )

    async def search_recipes(self, query: str, number: int = SEARCH_RESULT_COUNT) -> Dict[str, Any]:
        """
        Search recipes by free-text query.

        Returns:
            Dict with "results" (list of recipe summaries) and "totalResults"
        """
        params = {
            "query": query,
            "number": number,
            "addRecipeInformation": "true",
        }
        async with self._client() as client:
            try:
                response = await client.get("/recipes/complexSearch", params=params)
            except httpx.HTTPError as exc:
                raise RecipeLookupError(f"Recipe search request failed: {exc}") from exc

        self._raise_for_status(response)
        data = self._json(response)
        if not isinstance(data, dict):
            raise RecipeLookupError("Recipe search returned an unexpected payload")

        return {
            "results": data.get("results") or [],
            "totalResults": data.get("totalResults") or 0,
        }

    async def get_recipe_information(self, recipe_id: int) -> Tuple[Dict[str, Any], List[Any]]:
        """
        Fetch recipe information and analyzed instructions concurrently.

        Returns:
            Tuple of (recipe information dict, analyzed instructions list)
        """
        async with self._client() as client:
            try:
                recipe_response, instructions_response = await asyncio.gather(
                    client.get(f"/recipes/{recipe_id}/information", params={"includeNutrition": "false"}),
                    client.get(f"/recipes/{recipe_id}/analyzedInstructions"),
                )
            except httpx.HTTPError as exc:
                raise RecipeLookupError(f"Recipe details request failed: {exc}") from exc

        if recipe_response.is_error or instructions_response.is_error:
            logger.error(
                "Recipe API error: recipe=%s %s, instructions=%s %s",
                recipe_response.status_code,
                recipe_response.reason_phrase,
                instructions_response.status_code,
                instructions_response.reason_phrase,
            )
            if 402 in (recipe_response.status_code, instructions_response.status_code):
                raise RecipeQuotaExceededError("Spoonacular API limit reached.", status_code=402)
            raise RecipeLookupError(
                f"Failed to fetch recipe details: Recipe {recipe_response.status_code}, "
                f"Instructions {instructions_response.status_code}",
                status_code=recipe_response.status_code if recipe_response.is_error
                else instructions_response.status_code,
            )

        recipe = self._json(recipe_response)
        if not isinstance(recipe, dict):
            raise RecipeLookupError("Recipe details returned an unexpected payload")
        instructions = self._json(instructions_response)
        if not isinstance(instructions, list):
            instructions = []
        return recipe, instructions

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if not response.is_error:
            return
        logger.error("Recipe API error: %s %s", response.status_code, response.reason_phrase)
        if response.status_code == 402:
            raise RecipeQuotaExceededError("Spoonacular API limit reached.", status_code=402)
        raise RecipeLookupError(f"Spoonacular API error: {response.status_code}", status_code=response.status_code)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise RecipeLookupError(f"Recipe API returned invalid JSON: {exc}") from exc
