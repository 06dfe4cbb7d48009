"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallible.config import get_settings
    >>> settings = get_settings()
    >>> settings.trace_steps
    False
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # FALLIBLE_TRACE_STEPS=true
    # FALLIBLE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors; None auto-detects a tty")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class FallibleSettings(BaseSettings):
    """Root settings.

    Example environment variables:
        FALLIBLE_DEBUG=true
        FALLIBLE_TRACE_STEPS=true
        FALLIBLE_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")
    trace_steps: bool = Field(default=False, description="Log each sequencer step at debug level")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
