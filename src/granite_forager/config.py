"""
Application settings.

Values come from environment variables prefixed ``FORAGER_`` (or a local
``.env`` file). Components take explicit constructor arguments; settings
only supply the defaults at the outer edges (pipeline factory, CLI, flows).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the validation pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="FORAGER_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "granite-forager"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # iNaturalist
    api_base: str = "https://api.inaturalist.org/v1"
    iconic_taxa: str = "Fungi"
    quality_grade: str = "research"
    per_page: int = Field(default=200, ge=1, le=200)
    max_pages: int = Field(default=3, ge=1)
    request_timeout: float = 30.0

    # Self-throttling: ~100 calls/minute, plus a pause every N calls
    min_request_interval: float = Field(default=0.6, ge=0)
    burst_every: int = Field(default=50, ge=1)
    burst_cooldown: float = Field(default=2.0, ge=0)

    cache_ttl: float = Field(default=3600.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
