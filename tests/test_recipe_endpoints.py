"""
Tests for the recipe lookup endpoints.

Upstream recipe API calls are served by an httpx.MockTransport so the real
client code runs without network access.

Run with:
    pytest tests/test_recipe_endpoints.py -v
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi.testclient import TestClient

from recipe_carbon.api.v1.recipe_endpoints import get_recipe_client
from recipe_carbon.main import app
from recipe_carbon.services.recipe_client import (
    RecipeLookupNotConfiguredError,
    SpoonacularClient,
    extract_instructions,
    strip_html,
)

client = TestClient(app)

RECIPE = {
    "id": 715538,
    "title": "Classic Beef Stew",
    "image": "https://img.spoonacular.com/recipes/715538-556x370.jpg",
    "readyInMinutes": 120,
    "servings": 6,
    "summary": "A <b>hearty</b> stew with <a href='#'>tender</a> vegetables.",
    "extendedIngredients": [
        {"id": 23572, "name": "beef chuck roast", "originalName": "2 lbs beef chuck roast", "amount": 2, "unit": "lbs"},
        {"id": 11124, "name": "carrots", "amount": 4, "unit": "large"},
        {"id": 11352, "name": "potatoes", "amount": 3, "unit": ""},
    ],
}

INSTRUCTIONS = [
    {
        "name": "",
        "steps": [
            {"number": 1, "step": "Brown the beef."},
            {"number": 2, "step": "Simmer with vegetables."},
        ],
    }
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _use_upstream(handler):
    """Route the lookup client through a mock transport."""
    transport = httpx.MockTransport(handler)
    app.dependency_overrides[get_recipe_client] = lambda: SpoonacularClient(
        api_key="test-key", transport=transport
    )


def _detail_handler(recipe_status=200, instructions_status=200):
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["apiKey"] == "test-key"
        if request.url.path.endswith("/information"):
            return httpx.Response(recipe_status, json=RECIPE)
        if request.url.path.endswith("/analyzedInstructions"):
            return httpx.Response(instructions_status, json=INSTRUCTIONS)
        return httpx.Response(404)
    return handler


@pytest.fixture(autouse=True)
def _reset_dependency_overrides():
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _no_highlights():
    with patch(
        "recipe_carbon.api.v1.recipe_endpoints.highlights_service.generate",
        new_callable=AsyncMock,
        return_value=["High in protein", "Family friendly"],
    ) as mock_generate:
        yield mock_generate


# ---------------------------------------------------------------------------
# GET /api/v1/recipes/search
# ---------------------------------------------------------------------------

def test_search_requires_query():
    response = client.get("/api/v1/recipes/search")
    assert response.status_code == 400
    assert response.json()["detail"] == "Query parameter required"


def test_search_without_api_key():
    app.dependency_overrides[get_recipe_client] = lambda: None
    response = client.get("/api/v1/recipes/search", params={"q": "pasta"})
    assert response.status_code == 500
    assert response.json()["detail"] == "API key not configured"


def test_search_success():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/recipes/complexSearch"
        assert request.url.params["query"] == "pasta"
        assert request.url.params["number"] == "12"
        assert request.url.params["apiKey"] == "test-key"
        return httpx.Response(200, json={"results": [{"id": 1, "title": "Pasta Primavera"}], "totalResults": 1})

    _use_upstream(handler)
    response = client.get("/api/v1/recipes/search", params={"q": "pasta"})

    assert response.status_code == 200
    assert response.json() == {"results": [{"id": 1, "title": "Pasta Primavera"}], "totalResults": 1}


def test_search_defaults_missing_fields():
    _use_upstream(lambda request: httpx.Response(200, json={}))
    response = client.get("/api/v1/recipes/search", params={"q": "soup"})

    assert response.status_code == 200
    assert response.json() == {"results": [], "totalResults": 0}


def test_search_quota_exceeded():
    _use_upstream(lambda request: httpx.Response(402, json={"message": "quota"}))
    response = client.get("/api/v1/recipes/search", params={"q": "pasta"})

    assert response.status_code == 402
    assert response.json()["detail"] == "Spoonacular API limit reached."


def test_search_upstream_error():
    _use_upstream(lambda request: httpx.Response(503))
    response = client.get("/api/v1/recipes/search", params={"q": "pasta"})

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to search recipes"


def test_search_invalid_json():
    _use_upstream(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    response = client.get("/api/v1/recipes/search", params={"q": "pasta"})

    assert response.status_code == 500


# ---------------------------------------------------------------------------
# GET /api/v1/recipes/{recipe_id}
# ---------------------------------------------------------------------------

def test_recipe_details_with_carbon_score(_no_highlights):
    _use_upstream(_detail_handler())
    response = client.get("/api/v1/recipes/715538")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == 715538
    assert data["title"] == "Classic Beef Stew"
    assert data["readyInMinutes"] == 120
    assert data["servings"] == 6
    assert data["summary"] == "A hearty stew with tender vegetables."
    assert data["instructions"] == ["Brown the beef.", "Simmer with vegetables."]
    assert data["highlights"] == ["High in protein", "Family friendly"]

    footprints = [i["carbonFootprint"] for i in data["ingredients"]]
    # 60.0 * 2 * 0.45, 0.4 * 4 * 0.001 ("large" hits the gram rule), 0.3 * 3 * 0.1
    assert footprints == [54.0, 0.0, 0.09]
    assert data["ingredients"][2]["unit"] == "piece"
    assert data["totalCarbonScore"] == 54.09
    assert data["carbonLevel"] == "high"
    assert data["suggestion"]["originalIngredient"] == "beef chuck roast"
    assert data["suggestion"]["suggestedIngredient"] == "mushrooms (portobello)"

    _no_highlights.assert_awaited_once_with("A hearty stew with tender vegetables.")


def test_recipe_details_defaults():
    recipe = {"id": 5, "title": "Toast", "extendedIngredients": [{"name": "bread", "amount": 2, "unit": "slices"}]}
    _use_upstream(
        lambda request: httpx.Response(200, json=recipe)
        if request.url.path.endswith("/information")
        else httpx.Response(200, json=[])
    )
    response = client.get("/api/v1/recipes/5")

    assert response.status_code == 200
    data = response.json()
    assert data["readyInMinutes"] == 30
    assert data["servings"] == 4
    assert data["summary"] == ""
    assert data["instructions"] == []
    assert data["carbonLevel"] == "low"
    assert "suggestion" not in data


def test_recipe_details_non_string_summary():
    recipe = {"id": 6, "title": "Odd", "summary": {"html": "<b>x</b>"}, "extendedIngredients": []}
    _use_upstream(
        lambda request: httpx.Response(200, json=recipe)
        if request.url.path.endswith("/information")
        else httpx.Response(200, json=[])
    )
    response = client.get("/api/v1/recipes/6")

    assert response.status_code == 200
    assert response.json()["summary"] == ""


def test_recipe_details_without_api_key():
    app.dependency_overrides[get_recipe_client] = lambda: None
    response = client.get("/api/v1/recipes/1")
    assert response.status_code == 500
    assert response.json()["detail"] == "API key not configured"


def test_recipe_details_quota_exceeded_on_instructions():
    _use_upstream(_detail_handler(instructions_status=402))
    response = client.get("/api/v1/recipes/715538")

    assert response.status_code == 402
    assert response.json()["detail"] == "Spoonacular API limit reached."


def test_recipe_details_upstream_error():
    _use_upstream(_detail_handler(recipe_status=404))
    response = client.get("/api/v1/recipes/715538")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch recipe details"


def test_recipe_details_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _use_upstream(handler)
    response = client.get("/api/v1/recipes/715538")

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to fetch recipe details"


def test_recipe_id_must_be_numeric():
    response = client.get("/api/v1/recipes/not-a-number")
    assert response.status_code == 422


# ---------------------------------------------------------------------------
# Client helpers
# ---------------------------------------------------------------------------

def test_client_requires_api_key():
    with pytest.raises(RecipeLookupNotConfiguredError):
        SpoonacularClient(api_key="")


@patch("recipe_carbon.api.v1.recipe_endpoints.settings")
def test_get_recipe_client_from_settings(mock_settings):
    mock_settings.spoonacular_api_key = ""
    assert get_recipe_client() is None

    mock_settings.spoonacular_api_key = "live-key"
    mock_settings.spoonacular_base_url = "https://api.spoonacular.com"
    mock_settings.request_timeout_seconds = 5.0
    recipe_client = get_recipe_client()
    assert recipe_client.api_key == "live-key"
    assert recipe_client.timeout == 5.0


def test_strip_html():
    assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"
    assert strip_html(None) == ""
    assert strip_html(42) == ""
    assert strip_html(["<p>x</p>"]) == ""


def test_extract_instructions_handles_odd_payloads():
    assert extract_instructions([]) == []
    assert extract_instructions({"steps": []}) == []
    assert extract_instructions([{"steps": [{"step": "Mix."}, {"number": 2}]}]) == ["Mix."]
