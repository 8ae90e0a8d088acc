"""Read-only task directory backed by the records the task CRUD layer writes."""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from ..application.ports import TaskReader
from ..models.task import Task
from ..platform.clients import RedisClient
from ..platform.config import Settings
from .edge_store import storage_errors

logger = logging.getLogger(__name__)


class RedisTaskReader(TaskReader):
    """Resolve tasks from ``{prefix}task:{id}`` JSON records and the ``{prefix}tasks`` id list."""

    def __init__(self, redis: RedisClient, *, prefix: str = "taskdeps:") -> None:
        self._redis = redis
        self._prefix = prefix

    def _task_key(self, task_id: str) -> str:
        return f"{self._prefix}task:{task_id}"

    async def get_task(self, task_id: str) -> Optional[Task]:
        with storage_errors(f"read task {task_id}"):
            raw = await self._redis.get(self._task_key(task_id))
        if raw is None:
            return None
        return self._parse(task_id, raw)

    async def list_tasks(self) -> List[Task]:
        with storage_errors("list tasks"):
            task_ids = await self._redis.lrange(f"{self._prefix}tasks", 0, -1)
            if not task_ids:
                return []
            records = await self._redis.mget(*(self._task_key(task_id) for task_id in task_ids))
        tasks: List[Task] = []
        for task_id, raw in zip(task_ids, records):
            if raw is None:
                continue
            task = self._parse(task_id, raw)
            if task is not None:
                tasks.append(task)
        return tasks

    @staticmethod
    def _parse(task_id: str, raw: str) -> Optional[Task]:
        try:
            return Task.model_validate_json(raw)
        except ValidationError:
            logger.warning("Skipping unreadable task record %s", task_id)
            return None


def create_redis_task_reader(*, redis: RedisClient, settings: Settings) -> TaskReader:
    """Create a Redis task reader without relying on FastAPI wiring."""
    return RedisTaskReader(redis, prefix=settings.redis_key_prefix)
