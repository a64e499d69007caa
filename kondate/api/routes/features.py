"""
Feature flags API routes.

Public endpoint for clients to check feature availability.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Dict

from kondate.features import FeatureFlagService, get_feature_service

router = APIRouter(prefix="/api/features", tags=["features"])


class FeatureFlagsResponse(BaseModel):
    """Feature flag states keyed by flag name."""

    flags: Dict[str, bool]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "flags": {
                        "step_scheduling": True,
                        "recipe_generation": True,
                    }
                }
            ]
        }
    }


@router.get("", response_model=FeatureFlagsResponse)
async def get_feature_flags(
    feature_service: FeatureFlagService = Depends(get_feature_service),
):
    """
    Get current state of all feature flags.

    Use this to conditionally show/hide UI features based on server configuration.
    """
    return FeatureFlagsResponse(flags=feature_service.get_all_flags())
