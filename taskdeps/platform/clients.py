from __future__ import annotations

from typing import Any, List, Optional, Protocol

from fastapi import Depends
from upstash_redis.asyncio import Redis

from .config import Settings, get_settings


class RedisPipeline(Protocol):
    """Queued MULTI/EXEC transaction; commands run atomically on ``exec``."""

    def set(self, key: str, value: str) -> Any:
        ...

    def delete(self, *keys: str) -> Any:
        ...

    def rpush(self, key: str, *elements: str) -> Any:
        ...

    def lrem(self, key: str, count: int, element: str) -> Any:
        ...

    async def exec(self) -> List[Any]:
        ...


class RedisClient(Protocol):
    """Minimal async Redis client interface used by the application."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def mget(self, *keys: str) -> List[Optional[str]]:
        ...

    async def lrange(self, key: str, start: int, stop: int) -> List[str]:
        ...

    def multi(self) -> RedisPipeline:
        ...


def get_redis(settings: Settings = Depends(get_settings)) -> RedisClient:
    """Factory helper that provides a Redis client instance."""

    return Redis(
        url=settings.upstash_redis_rest_url,
        token=settings.upstash_redis_rest_token,
    )


__all__ = ["RedisClient", "RedisPipeline", "get_redis"]
