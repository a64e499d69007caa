"""
Application configuration using Pydantic settings.

All configurable values are loaded from environment variables with sensible defaults.
This keeps scheduler limits, LLM options and HTTP settings in one place across
environments (development, testing, production).
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import model_validator
from typing import Optional

# Get the directory containing this config file (kondate/)
_PACKAGE_DIR = Path(__file__).parent.resolve()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App metadata
    app_name: str = "Kondate Planner API"
    app_version: str = "0.1.0"
    debug: bool = False

    # Logging configuration
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    # CORS - development defaults, override via CORS_ORIGINS env var for production
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Rate limiting configuration
    rate_limit_enabled: bool = True  # Set to False to disable rate limiting globally
    rate_limit_generate: str = "10/minute"  # Limit for LLM recipe generation

    # Step scheduler configuration
    schedule_max_passes: int = 10  # Repair passes before returning a degraded schedule
    schedule_empty_plan_minutes: int = 0  # optimizedTime reported for a plan with no steps
    schedule_max_steps: int = 200  # Larger plans are rejected as invalid

    # Text timeline rendering
    timeline_width: int = 60  # Bar area width in characters
    timeline_tick_minutes: int = 5  # Axis tick spacing

    # OpenAI configuration for LLM-powered recipe generation
    openai_api_key: Optional[str] = None  # Set via OPENAI_API_KEY env var
    openai_model: str = "gpt-4o-mini"
    openai_timeout_seconds: int = 60  # Request timeout
    openai_temperature: float = 0.7
    openai_max_tokens: int = 2000
    openai_max_retries: int = 3  # Retry attempts for transient failures

    @model_validator(mode="after")
    def validate_scheduler_limits(self) -> "Settings":
        """Reject limits the scheduler cannot run with."""
        if self.schedule_max_passes < 1:
            raise ValueError("SCHEDULE_MAX_PASSES must be at least 1")
        if self.schedule_empty_plan_minutes < 0:
            raise ValueError("SCHEDULE_EMPTY_PLAN_MINUTES cannot be negative")
        if self.timeline_width < 10:
            raise ValueError("TIMELINE_WIDTH must be at least 10 characters")
        return self

    model_config = SettingsConfigDict(
        env_file=_PACKAGE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


def get_settings(**overrides) -> Settings:
    """
    Factory function to create Settings instance.

    Useful for testing where you need to override specific values
    without modifying environment variables.

    Args:
        **overrides: Key-value pairs to override default settings

    Returns:
        Settings instance with overrides applied

    Example:
        test_settings = get_settings(debug=True, schedule_max_passes=3)
    """
    return Settings(**overrides)


# Global settings instance (lazy initialization for testability)
# In tests, you can reload this module or use get_settings() directly
settings = get_settings()
