from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Hosting environments define upper-case names (``API_KEY``); match them
    # regardless of case.
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    api_key: str
    upstash_redis_rest_url: str
    upstash_redis_rest_token: str
    redis_key_prefix: str = "taskdeps:"
    max_dependencies_per_task: int = Field(10, ge=1)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
