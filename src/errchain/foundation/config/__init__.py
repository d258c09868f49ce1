"""Configuration management using pydantic-settings."""

from .settings import ErrchainSettings, clear_settings_cache, get_settings

__all__ = [
    "ErrchainSettings",
    "clear_settings_cache",
    "get_settings",
]
