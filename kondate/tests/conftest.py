"""
Shared pytest fixtures for Kondate tests.

This module provides common fixtures for:
- FastAPI test client
- Factory functions for step records and generated recipes
- A mocked OpenAI client
"""
import os
import pytest
from typing import Any, Dict, Generator, List
from unittest.mock import MagicMock

# Set test environment variables BEFORE importing app modules
# This ensures Settings loads in debug/test mode (rate limiting off)
os.environ.setdefault("DEBUG", "true")

from fastapi.testclient import TestClient

from kondate.clients.openai_client import OpenAIClient
from kondate.main import app


# ============================================================================
# Client Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Create FastAPI test client.

    Dependency overrides set by a test are cleared afterwards.
    """
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# Factory Functions
# ============================================================================

def make_step(
    step_id: int,
    duration: int = 5,
    dependencies: List[int] = None,
    can_parallel: bool = False,
    description: str = "",
    **extra: Any,
) -> Dict[str, Any]:
    """Build a step record in the producer's wire format."""
    record = {
        "id": step_id,
        "title": extra.pop("title", f"Step {step_id}"),
        "description": description,
        "duration": duration,
        "dependencies": dependencies or [],
        "canParallel": can_parallel,
    }
    record.update(extra)
    return record


def make_recipe_payload(**overrides: Any) -> Dict[str, Any]:
    """Build a complete LLM recipe response."""
    payload = {
        "title": "Oyakodon and miso soup",
        "menuItems": ["Oyakodon", "Miso soup"],
        "ingredients": ["chicken thigh 200g", "egg x3", "onion 1/2", "tofu 1/2 block", "miso 2 tbsp"],
        "instructions": ["Slice the onion and chicken", "Simmer in broth", "Add egg", "Make the soup"],
        "tips": ["Do not overcook the egg"],
        "servings": "2 servings",
        "totalTime": "25 minutes",
        "steps": [
            make_step(1, 5, description="Slice the onion and chicken", category="prep", dishLabel="A"),
            make_step(2, 10, [1], True, description="Simmer chicken in a pot", category="cook", dishLabel="A"),
            make_step(3, 8, [], True, description="Simmer tofu and miso in a saucepan", category="cook", dishLabel="B"),
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def step_factory():
    """Expose make_step to tests as a fixture."""
    return make_step


@pytest.fixture
def mock_openai_client() -> MagicMock:
    """OpenAI client double that returns a complete recipe."""
    mock_client = MagicMock(spec=OpenAIClient)
    mock_client.is_configured = True
    mock_client.parse_json.return_value = make_recipe_payload()
    return mock_client


@pytest.fixture
def recipe_payload_factory():
    """Expose make_recipe_payload to tests as a fixture."""
    return make_recipe_payload
