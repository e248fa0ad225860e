# ruff: noqa: ERA001
"""
Base settings for the match tracker pipeline.

Every value can be overridden from the environment (prefix ``DOTA_``) or from
a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project structure
BASE_DIR = Path(__file__).resolve(strict=True).parent.parent.parent


# PROVIDER RETRY
# ------------------------------------------------------------------------------
class RetrySettings(BaseModel):
    max_attempts: int = Field(default=3, ge=1, le=10)
    base_delay_s: float = Field(default=1.0, ge=0)
    max_delay_s: float = Field(default=30.0, ge=0)

    model_config = {"frozen": True}


# DOTA API CONFIG
# ------------------------------------------------------------------------------
class ProviderSettings(BaseSettings):
    base_url: str = "https://api.opendota.com/api"
    timeout_s: float = Field(default=30.0, gt=0)
    retry: RetrySettings = RetrySettings()

    # LOGGING
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_prefix="DOTA_",
        env_nested_delimiter="__",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )


@lru_cache
def get_settings() -> ProviderSettings:
    """Cached settings instance (call ``get_settings.cache_clear()`` in tests)."""
    return ProviderSettings()
