"""
Configuration Management for the Ledger Engine

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Per-user preferences (month start day, rollover) live in UserSettings
records owned by the store; this module only holds process-wide defaults
and tuning knobs.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Ledger engine tuning and defaults for new stores."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    recent_activity_hours: int = Field(
        default=48,
        ge=1,
        le=24 * 31,
        description="Width of the recent activity window in hours"
    )
    import_timestamp_step_ms: int = Field(
        default=5,
        ge=1,
        description="Milliseconds between synthesized timestamps of imported rows"
    )
    default_month_start_day: int = Field(
        default=1,
        ge=1,
        le=31,
        description="Accounting month start day for a freshly seeded store"
    )
    default_enable_rollover: bool = Field(
        default=True,
        description="Whether a freshly seeded store shows the all-time balance"
    )
    default_currency_code: str = Field(
        default="PKR",
        min_length=3,
        max_length=3,
        description="ISO code of the currency a freshly seeded store uses"
    )

    @field_validator('default_currency_code')
    @classmethod
    def upper_currency_code(cls, v: str) -> str:
        return v.upper()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    debug_mode: bool = Field(
        default=False,
        description="Human-readable console logs, overriding log_json"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (console renderer otherwise)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def engine(self) -> EngineSettings:
        return EngineSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.engine
        results["engine"] = True
    except Exception as e:
        results["engine"] = False
        results["engine_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
