"""
Tests for application configuration and settings validation.

Tests the Settings class behavior including:
- Default values
- Environment variable overrides
- Scheduler limit validation
"""
import pytest
import os
from unittest.mock import patch

from kondate.config import Settings, get_settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_app_name_default(self):
        settings = get_settings(debug=True)
        assert settings.app_name == "Kondate Planner API"

    def test_app_version_default(self):
        settings = get_settings(debug=True)
        assert settings.app_version == "0.1.0"

    def test_scheduler_defaults(self):
        """Ten repair passes, empty plan reports 0 minutes."""
        settings = get_settings(debug=True)
        assert settings.schedule_max_passes == 10
        assert settings.schedule_empty_plan_minutes == 0
        assert settings.schedule_max_steps == 200

    def test_timeline_defaults(self):
        settings = get_settings(debug=True)
        assert settings.timeline_width == 60
        assert settings.timeline_tick_minutes == 5

    def test_openai_defaults(self):
        settings = get_settings(debug=True, openai_api_key=None)
        assert settings.openai_api_key is None
        assert settings.openai_model == "gpt-4o-mini"
        assert settings.openai_temperature == 0.7
        assert settings.openai_max_tokens == 2000

    def test_cors_origins_default(self):
        settings = get_settings(debug=True)
        assert "http://localhost:3000" in settings.cors_origins

    def test_rate_limit_default(self):
        settings = get_settings(debug=True)
        assert settings.rate_limit_enabled is True
        assert settings.rate_limit_generate == "10/minute"


class TestSchedulerLimitValidation:
    """Scheduler limits the engine cannot run with are rejected."""

    def test_rejects_zero_passes(self):
        with pytest.raises(ValueError) as exc_info:
            get_settings(schedule_max_passes=0)
        assert "SCHEDULE_MAX_PASSES" in str(exc_info.value)

    def test_rejects_negative_empty_plan_minutes(self):
        with pytest.raises(ValueError):
            get_settings(schedule_empty_plan_minutes=-1)

    def test_rejects_narrow_timeline(self):
        with pytest.raises(ValueError):
            get_settings(timeline_width=5)

    def test_accepts_single_pass(self):
        assert get_settings(schedule_max_passes=1).schedule_max_passes == 1


class TestEnvironmentVariables:
    """Tests for environment variable loading."""

    def test_debug_from_environment(self):
        with patch.dict(os.environ, {"DEBUG": "true"}):
            settings = Settings()
            assert settings.debug is True

    def test_max_passes_from_environment(self):
        with patch.dict(os.environ, {"SCHEDULE_MAX_PASSES": "3"}):
            settings = Settings()
            assert settings.schedule_max_passes == 3

    def test_openai_key_from_environment(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}):
            settings = Settings()
            assert settings.openai_api_key == "sk-test"

    def test_case_insensitive_env_vars(self):
        with patch.dict(os.environ, {"timeline_width": "80"}):
            settings = Settings()
            assert settings.timeline_width == 80
