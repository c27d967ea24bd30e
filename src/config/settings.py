"""
Centralized settings management using pydantic-settings.

Engine tuning values and user-facing defaults are defined here.
Use get_settings() to access the singleton settings instance.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables and an optional ``.env``.

    Nothing is required; every value has a default so the engine can be
    constructed in a bare environment.

    Optional environment variables:
        - ENVIRONMENT: development, staging, production
        - LOG_LEVEL / JSON_LOGS: logging output
        - TEMPERATURE_UNIT: fahrenheit or celsius (display unit for suggestions)
        - THERMAL_PREFERENCE: cold, average or warm
        - MIN_SIMILARITY: history match floor (0-1)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() in ("development", "dev", "local")

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="Minimum log level")
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    # ==========================================================================
    # User defaults
    # ==========================================================================
    temperature_unit: Literal["fahrenheit", "celsius"] = Field(
        default="fahrenheit",
        description="Display unit used when formatting suggestion text",
    )
    thermal_preference: Literal["cold", "average", "warm"] = Field(
        default="average",
        description="Default self-reported thermal preference",
    )

    @field_validator("temperature_unit", "thermal_preference", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # ==========================================================================
    # History matching
    # ==========================================================================
    min_similarity: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Similarity floor (inclusive) for a record to count as a match",
    )
    similar_conditions_limit: int = Field(
        default=5,
        ge=1,
        description="Number of top matches returned as similar conditions",
    )
    feedback_adjustment_enabled: bool = Field(
        default=True,
        description="Shift the matching target using too_cold / too_hot feedback",
    )
    recent_match_enabled: bool = Field(
        default=True,
        description="Short-circuit to a same-day record for the same activity",
    )

    # ==========================================================================
    # Suggestions
    # ==========================================================================
    suggestion_confidence_ceiling: int = Field(
        default=70,
        ge=0,
        le=100,
        description="Suggestions are suppressed at or above this confidence",
    )
    comfort_diff_threshold_c: float = Field(
        default=2.0,
        ge=0.0,
        description="Minimum |current - historical| comfort difference (C) for layering advice",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses lru_cache to ensure only one instance is created.
    Settings are loaded from environment variables and .env file.
    """
    env_file = Path(__file__).parent.parent.parent / ".env"
    return Settings(_env_file=env_file if env_file.exists() else None)


def get_settings_for_testing(**overrides) -> Settings:
    """
    Create a settings instance for testing with optional overrides.

    This bypasses the cache to allow different settings in tests.
    """
    test_defaults = {
        "environment": "testing",
        "debug": True,
    }
    test_defaults.update(overrides)

    return Settings(_env_file=None, **test_defaults)
