"""Configuration package."""

from ledger.config.settings import (
    AppSettings,
    EngineSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "EngineSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
