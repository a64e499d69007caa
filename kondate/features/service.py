"""
Feature flag service for checking feature states.

This service can be injected into route handlers as a dependency.
"""

from typing import Dict, Optional
from fastapi import Depends, HTTPException, status

from kondate.features.flags import Feature, FeatureFlags, feature_flags


class FeatureFlagService:
    """
    Service for evaluating feature flags.

    Attributes:
        flags: The FeatureFlags configuration instance
    """

    def __init__(self, flags: Optional[FeatureFlags] = None):
        """
        Initialize the feature flag service.

        Args:
            flags: Optional FeatureFlags instance. Uses global instance if not provided.
        """
        self.flags = flags or feature_flags

    def is_enabled(self, feature: Feature) -> bool:
        """Check if a feature is enabled."""
        return self.flags.get_flag(feature)

    def require_feature(self, feature: Feature) -> None:
        """
        Require a feature to be enabled, raising an exception if not.

        Args:
            feature: The feature to require

        Raises:
            HTTPException: 503 Service Unavailable if feature is disabled
        """
        if not self.is_enabled(feature):
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={
                    "error_code": "FEATURE_DISABLED",
                    "message": f"Feature '{feature.value}' is currently disabled",
                    "feature": feature.value,
                },
            )

    def get_all_flags(self) -> Dict[str, bool]:
        """Get the current state of all feature flags."""
        return self.flags.get_all_flags()


# Global service instance
_feature_service: Optional[FeatureFlagService] = None


def get_feature_service() -> FeatureFlagService:
    """
    Get or create the global feature flag service instance.

    This is used as a FastAPI dependency for injecting the service
    into route handlers.
    """
    global _feature_service
    if _feature_service is None:
        _feature_service = FeatureFlagService()
    return _feature_service


def require_feature(feature: Feature):
    """
    FastAPI dependency factory that requires a feature to be enabled.

    Usage:
        @router.post("/api/generate-recipe")
        def generate_recipe(
            _: None = Depends(require_feature(Feature.RECIPE_GENERATION)),
        ):
            pass

    Args:
        feature: The feature that must be enabled

    Returns:
        A dependency function that raises HTTPException if feature is disabled
    """

    def check_feature(
        feature_service: FeatureFlagService = Depends(get_feature_service),
    ) -> None:
        feature_service.require_feature(feature)

    return check_feature
