"""
Tests for the /api/generate-recipe endpoint.

The recipe generator is injected with a mocked OpenAI client.
"""
import pytest
from unittest.mock import MagicMock

from kondate.api.dependencies import get_recipe_generator
from kondate.clients.openai_client import OpenAIClient, OpenAIClientError
from kondate.engine.recipe_generator import RecipeGenerator
from kondate.main import app


@pytest.fixture
def use_client(client):
    """Route recipe generation through the given OpenAI client double."""
    def _use(openai_client):
        app.dependency_overrides[get_recipe_generator] = lambda: RecipeGenerator(client=openai_client)
    return _use


class TestGenerateRecipeEndpoint:
    """Tests for POST /api/generate-recipe."""

    def test_returns_scheduled_recipe(self, client, use_client, mock_openai_client):
        use_client(mock_openai_client)

        response = client.post(
            "/api/generate-recipe",
            json={"ingredients": ["chicken", "egg"], "familyMembers": "2 adults", "genre": "japanese"},
        )

        assert response.status_code == 200
        recipe = response.json()["recipe"]
        assert recipe["title"] == "Oyakodon and miso soup"
        assert recipe["menuItems"] == ["Oyakodon", "Miso soup"]
        assert recipe["totalTime"] == "25 minutes"
        assert recipe["optimizedTime"] == 15
        assert [step["startTime"] for step in recipe["steps"]] == [0, 5, 5]

    def test_no_ingredients_returns_400(self, client, use_client, mock_openai_client):
        use_client(mock_openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": []})

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == "RECIPE_NO_INGREDIENTS"

    def test_missing_api_key_returns_503(self, client, use_client):
        openai_client = MagicMock(spec=OpenAIClient)
        openai_client.is_configured = False
        use_client(openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 503
        assert response.json()["detail"]["error_code"] == "EXTERNAL_LLM_UNAVAILABLE"

    def test_llm_failure_returns_502(self, client, use_client, mock_openai_client):
        mock_openai_client.parse_json.side_effect = OpenAIClientError("connection reset")
        use_client(mock_openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 502
        assert response.json()["detail"]["error_code"] == "RECIPE_GENERATION_FAILED"

    def test_incomplete_recipe_returns_502(self, client, use_client, mock_openai_client, recipe_payload_factory):
        mock_openai_client.parse_json.return_value = recipe_payload_factory(menuItems=[])
        use_client(mock_openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error_code"] == "RECIPE_INCOMPLETE"
        assert detail["details"]["missing_fields"] == ["menuItems"]

    def test_unschedulable_steps_return_422(self, client, use_client, mock_openai_client, recipe_payload_factory):
        payload = recipe_payload_factory()
        payload["steps"][0]["dependencies"] = [3]
        payload["steps"][2]["dependencies"] = [1]
        mock_openai_client.parse_json.return_value = payload
        use_client(mock_openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"]})

        assert response.status_code == 422
        assert response.json()["detail"]["error_code"] == "SCHEDULE_CYCLIC_DEPENDENCY"

    def test_invalid_genre_rejected(self, client, use_client, mock_openai_client):
        use_client(mock_openai_client)

        response = client.post("/api/generate-recipe", json={"ingredients": ["egg"], "genre": "martian"})

        assert response.status_code == 422
        mock_openai_client.parse_json.assert_not_called()
