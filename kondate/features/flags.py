"""
Feature flag definitions and configuration.

This module defines all available feature flags and their default states.
Feature flags can be overridden via environment variables.
"""

from enum import Enum
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Feature(str, Enum):
    """
    Enumeration of all feature flags in the application.

    Each feature flag represents a toggleable capability that can be
    enabled or disabled without code changes.
    """

    STEP_SCHEDULING = "step_scheduling"
    RECIPE_GENERATION = "recipe_generation"


# Default states for all features (True = enabled by default)
DEFAULT_FEATURE_STATES: Dict[Feature, bool] = {
    Feature.STEP_SCHEDULING: True,
    Feature.RECIPE_GENERATION: True,  # Still needs OPENAI_API_KEY to do anything
}


class FeatureFlags(BaseSettings):
    """
    Feature flag settings loaded from environment variables.

    Each feature flag can be toggled via an environment variable:
    FEATURE_<FLAG_NAME>=true/false

    Example:
        FEATURE_RECIPE_GENERATION=false
    """

    feature_step_scheduling: bool = DEFAULT_FEATURE_STATES[Feature.STEP_SCHEDULING]
    feature_recipe_generation: bool = DEFAULT_FEATURE_STATES[Feature.RECIPE_GENERATION]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore non-feature-flag environment variables
    )

    def get_flag(self, feature: Feature) -> bool:
        """
        Get the current state of a feature flag.

        Args:
            feature: The feature to check

        Returns:
            True if the feature is enabled, False otherwise
        """
        attr_name = f"feature_{feature.value}"
        return getattr(self, attr_name, DEFAULT_FEATURE_STATES.get(feature, False))

    def get_all_flags(self) -> Dict[str, bool]:
        """Get the current state of all feature flags."""
        return {feature.value: self.get_flag(feature) for feature in Feature}


def get_feature_flags(**overrides) -> FeatureFlags:
    """
    Factory function to create FeatureFlags instance.

    Args:
        **overrides: Key-value pairs to override default flags

    Returns:
        FeatureFlags instance with overrides applied
    """
    return FeatureFlags(**overrides)


# Global feature flags instance
feature_flags = get_feature_flags()
