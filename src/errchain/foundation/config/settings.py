"""Environment-based configuration using pydantic-settings.

Example:
    >>> from errchain.foundation.config import get_settings
    >>> get_settings().home_marker
    '~'

    # Or with environment variables:
    # ERRCHAIN_MAIN_MODULE=myapp
    # ERRCHAIN_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ErrchainSettings(BaseSettings):
    """Root settings for errchain.

    Loads configuration from environment variables with ERRCHAIN_ prefix.

    Example environment variables:
        ERRCHAIN_MAIN_MODULE=myapp
        ERRCHAIN_HOME_MARKER=~
        ERRCHAIN_LAZY_MARKER=<lazy>
        ERRCHAIN_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    main_module: str | None = Field(
        default=None,
        description="Module prefix abbreviated in traces; detected from __main__ when unset",
    )
    home_marker: str = Field(default="~", min_length=1, description="Replaces the main module prefix")
    lazy_marker: str = Field(default="<lazy>", description="Prefix of lazily rendered argument descriptions")
    unknown_file: str = Field(default="?file?", min_length=1, description="File of an unresolved call site")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Normalize level name to uppercase."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("main_module", mode="before")
    @classmethod
    def _strip_module(cls, v: str | None) -> str | None:
        """Treat a blank module as unset."""
        if isinstance(v, str):
            v = v.strip().rstrip("./")
            return v or None
        return v


@lru_cache(maxsize=1)
def get_settings() -> ErrchainSettings:
    """Get the global settings instance (cached)."""
    return ErrchainSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
