"""Shared test fixtures and doubles."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from taskdeps import main
from taskdeps.application.service import DependencyService
from taskdeps.infrastructure.edge_store import RedisEdgeStore
from taskdeps.models import Task
from taskdeps.platform.clients import get_redis
from taskdeps.platform.config import Settings, get_settings
from taskdeps.platform.wiring import get_write_lock

from tests.fakes import RedisFake, TaskDirectoryFake


def seed_tasks(redis: RedisFake, settings: Settings, *tasks: Task) -> None:
    """Store task records the way the task CRUD layer writes them."""

    prefix = settings.redis_key_prefix
    for task in tasks:
        redis.seed(f"{prefix}task:{task.id}", task.model_dump_json())
        redis.seed_list(f"{prefix}tasks", task.id)


@pytest.fixture
def settings() -> Settings:
    """Canonical settings instance reused across tests."""

    return Settings(
        api_key="test-key",
        upstash_redis_rest_url="https://redis.example.com",
        upstash_redis_rest_token="redis-token",
        redis_key_prefix="test:",
        max_dependencies_per_task=10,
    )


@pytest.fixture
def redis_fake() -> RedisFake:
    return RedisFake()


@pytest.fixture
def edge_store(redis_fake: RedisFake, settings: Settings) -> RedisEdgeStore:
    return RedisEdgeStore(redis_fake, prefix=settings.redis_key_prefix)


@pytest.fixture
def task_directory() -> TaskDirectoryFake:
    return TaskDirectoryFake()


@pytest.fixture
def service(
    edge_store: RedisEdgeStore, task_directory: TaskDirectoryFake, settings: Settings
) -> DependencyService:
    return DependencyService(
        edge_store,
        task_directory,
        max_dependencies=settings.max_dependencies_per_task,
    )


@pytest.fixture
def app(settings: Settings, redis_fake: RedisFake) -> Iterator[FastAPI]:
    """Configured FastAPI application instance for integration tests."""

    app = main.app
    lock = asyncio.Lock()
    overrides = {
        get_settings: lambda: settings,
        get_redis: lambda: redis_fake,
        get_write_lock: lambda: lock,
    }
    app.dependency_overrides.update(overrides)
    try:
        yield app
    finally:
        for dependency in overrides:
            app.dependency_overrides.pop(dependency, None)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Async HTTP client bound to the FastAPI app."""

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as api_client:
        yield api_client
