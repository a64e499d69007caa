"""
Feature flags module for the Kondate planner.

This module provides a simple feature flag system that allows features
to be enabled or disabled without code changes.
"""

from kondate.features.flags import Feature, FeatureFlags, get_feature_flags
from kondate.features.service import FeatureFlagService, get_feature_service, require_feature

__all__ = [
    "Feature",
    "FeatureFlags",
    "get_feature_flags",
    "FeatureFlagService",
    "get_feature_service",
    "require_feature",
]
