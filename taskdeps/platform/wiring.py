"""FastAPI dependency wiring for the dependency service."""

from __future__ import annotations

import asyncio
from functools import lru_cache

from fastapi import Depends

from ..application.ports import EdgeStore, TaskReader
from ..application.service import DependencyService
from ..infrastructure.edge_store import create_redis_edge_store
from ..infrastructure.task_reader import create_redis_task_reader
from .clients import RedisClient, get_redis
from .config import Settings, get_settings


@lru_cache()
def get_write_lock() -> asyncio.Lock:
    """Process-wide writer lock shared by every request's service instance."""

    return asyncio.Lock()


def provide_edge_store(
    redis: RedisClient = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> EdgeStore:
    return create_redis_edge_store(redis=redis, settings=settings)


def provide_task_reader(
    redis: RedisClient = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> TaskReader:
    return create_redis_task_reader(redis=redis, settings=settings)


def get_dependency_service(
    store: EdgeStore = Depends(provide_edge_store),
    tasks: TaskReader = Depends(provide_task_reader),
    settings: Settings = Depends(get_settings),
    lock: asyncio.Lock = Depends(get_write_lock),
) -> DependencyService:
    return DependencyService(
        store,
        tasks,
        max_dependencies=settings.max_dependencies_per_task,
        lock=lock,
    )


__all__ = [
    "get_dependency_service",
    "get_write_lock",
    "provide_edge_store",
    "provide_task_reader",
]
