"""
LLM-powered recipe generator.

Asks OpenAI for a one-meal menu built from the ingredients on hand, then runs
the returned cooking steps through the StepScheduler so the recipe carries a
conflict-free, gap-free timeline.
"""

import logging
from typing import Any, Dict, List, Optional

from kondate.clients.openai_client import OpenAIClient, OpenAIClientError
from kondate.engine.step_scheduler import StepScheduler
from kondate.errors import (
    IncompleteRecipeError,
    LLMNotConfiguredError,
    NoIngredientsError,
    RecipeGenerationError,
)
from kondate.models.schemas import GENRE_DESCRIPTIONS, Recipe, RecipeRequest

logger = logging.getLogger(__name__)


REQUIRED_FIELDS = (
    "title",
    "menuItems",
    "ingredients",
    "instructions",
    "tips",
    "servings",
    "totalTime",
)


SYSTEM_PROMPT = """You are a home cooking expert. Suggest tasty, easy menus that
match the user's conditions. Always answer with a single JSON object in the
requested format and nothing else."""


def build_user_prompt(request: RecipeRequest) -> str:
    """Build the user prompt for the LLM."""
    genre_description = GENRE_DESCRIPTIONS.get(request.genre.value, "")
    genre_condition = f"- Cuisine genre: {genre_description}\n" if genre_description else ""
    extra_condition = (
        f"- Additional request: {request.additional_request}\n"
        if request.additional_request
        else ""
    )

    return f"""Suggest one tasty, easy meal for the conditions below.

Conditions:
- Available ingredients: {', '.join(request.ingredients)}
- Family members: {request.family_members or 'not specified'}
- Ages: {request.family_ages or 'not specified'}
{genre_condition}{extra_condition}- Cooking time: under an hour
- Easy to make, nutritionally balanced
- The menu must work as one complete meal (a single bowl dish is fine)
- Buying extra ingredients is fine

Cooking steps:
- Split the work into small steps with a duration in whole minutes
- List the ids of steps that must finish first in "dependencies"
- Set "canParallel" to true only for steps that can run alongside other work
  (simmering, oven time, soaking)
- "category" is one of prep, cook, serve, wait
- For multi-dish menus, tag each step with "dishLabel" A, B, C... per dish

Answer in this JSON format:
{{
  "title": "Menu name (e.g. Oyakodon and miso soup)",
  "menuItems": ["dish 1", "dish 2"],
  "ingredients": ["ingredient with amount 1", "ingredient with amount 2"],
  "instructions": ["instruction 1", "instruction 2"],
  "tips": ["tip 1", "tip 2"],
  "servings": "servings (e.g. 4 servings)",
  "totalTime": "time from prep to table (e.g. 30 minutes)",
  "steps": [
    {{"id": 1, "title": "...", "description": "...", "duration": 5, "dependencies": [], "canParallel": false, "category": "prep", "dishLabel": "A"}}
  ]
}}"""


def missing_fields(data: Dict[str, Any]) -> List[str]:
    """Required recipe fields that are absent or empty."""
    return [field for field in REQUIRED_FIELDS if not data.get(field)]


class RecipeGenerator:
    """
    Generate a scheduled one-meal recipe with OpenAI.

    Flow:
    - Reject requests without ingredients
    - Ask the model for a JSON recipe
    - Check the required fields
    - Schedule the returned steps (any timing from the model is discarded)
    """

    def __init__(
        self,
        client: Optional[OpenAIClient] = None,
        scheduler: Optional[StepScheduler] = None,
    ):
        self._client = client or OpenAIClient()
        self._scheduler = scheduler or StepScheduler()

    def generate(self, request: RecipeRequest) -> Recipe:
        """
        Generate a recipe for the request.

        Args:
            request: Ingredients and household conditions.

        Returns:
            Recipe with scheduled steps and optimized_time when the model returned steps.

        Raises:
            NoIngredientsError: If the request has no ingredients.
            LLMNotConfiguredError: If no OpenAI API key is configured.
            RecipeGenerationError: If the API call fails or returns invalid JSON.
            IncompleteRecipeError: If required recipe fields are missing.
            ScheduleError: If the returned steps cannot be scheduled.
        """
        if not request.ingredients:
            raise NoIngredientsError()

        if not self._client.is_configured:
            logger.error("Recipe generation requested but OPENAI_API_KEY is not set")
            raise LLMNotConfiguredError()

        logger.info(
            f"Generating recipe from {len(request.ingredients)} ingredient(s), "
            f"genre={request.genre.value}"
        )

        try:
            data = self._client.parse_json(
                system_prompt=SYSTEM_PROMPT,
                user_prompt=build_user_prompt(request),
            )
        except OpenAIClientError as e:
            raise RecipeGenerationError(str(e), status_code=502) from e

        missing = missing_fields(data)
        if missing:
            logger.warning(f"Generated recipe is missing fields: {missing}")
            raise IncompleteRecipeError(missing)

        data = dict(data)
        raw_steps = data.pop("steps", None) or []
        data.pop("optimizedTime", None)
        data.pop("converged", None)
        data["servings"] = str(data["servings"])
        data["totalTime"] = str(data["totalTime"])

        try:
            recipe = Recipe.model_validate(data)
        except ValueError as e:
            raise RecipeGenerationError(
                "recipe fields have unexpected types",
                details={"error": str(e)},
                status_code=502,
            ) from e

        if not raw_steps:
            return recipe

        schedule = self._scheduler.schedule(raw_steps)
        return recipe.model_copy(
            update={
                "steps": schedule.steps,
                "optimized_time": schedule.optimized_time,
                "advisories": schedule.advisories,
                "converged": schedule.converged,
            }
        )
