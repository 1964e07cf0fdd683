"""Environment configuration for the scorekeeper store."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """Store backend selection and connection parameters."""

    model_config = SettingsConfigDict(
        env_prefix="SCOREKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["redis", "memory"] = Field(
        "redis",
        description="Store implementation to build.",
    )
    redis_url: str = Field(
        "redis://localhost:6379/0",
        description="Redis connection string; fakeredis:// selects the in-process fake server.",
    )
    redis_pool_size: int = Field(
        10,
        ge=1,
        le=512,
        description="Fixed size of the redis connection pool.",
    )
    log_level: str = Field("INFO", description="Log level used by the CLI.")


@lru_cache
def get_settings() -> StoreSettings:
    """Return cached settings instance."""

    return StoreSettings()
