"""
Recipe generation API routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from kondate.api.dependencies import get_recipe_generator
from kondate.config import settings
from kondate.engine.recipe_generator import RecipeGenerator
from kondate.errors import ErrorCode, KondateError
from kondate.features import Feature
from kondate.features.service import require_feature
from kondate.models.schemas import RecipeRequest, RecipeResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recipes"])

# Rate limiter for the LLM endpoint
# Disabled in debug/test mode or when rate_limit_enabled is False
limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit_enabled and not settings.debug,
)


@router.post("/generate-recipe", response_model=RecipeResponse, response_model_by_alias=True)
@limiter.limit(settings.rate_limit_generate)
async def generate_recipe(
    request: Request,
    body: RecipeRequest,
    generator: RecipeGenerator = Depends(get_recipe_generator),
    _: None = Depends(require_feature(Feature.RECIPE_GENERATION)),
):
    """
    Generate a one-meal recipe from the ingredients on hand.

    Rate limited per IP. The recipe's cooking steps come back scheduled, with
    startTime on every step and the total time in optimizedTime.
    """
    try:
        recipe = generator.generate(body)
    except KondateError as e:
        logger.warning(f"Recipe generation failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.exception("Unexpected error during recipe generation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error_code": ErrorCode.INTERNAL_ERROR.value,
                "message": "An error occurred while generating the recipe",
                "details": {"error_type": type(e).__name__},
            },
        )

    return RecipeResponse(recipe=recipe)
