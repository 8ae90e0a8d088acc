"""Upstash Redis implementation of the edge store port.

Key layout, relative to the configured prefix:

* ``edge:{id}`` holds the JSON record of one edge.
* ``edges`` lists every edge id in insertion order.
* ``blocking:{task_id}`` and ``dependent:{task_id}`` list edge ids by endpoint.

Each mutation is queued on a MULTI/EXEC pipeline so a record and its index
entries are written or removed together.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Tuple

import httpx
from pydantic import ValidationError
from upstash_redis.errors import UpstashError

from ..application.ports import EdgeStore
from ..domain.errors import StorageError
from ..models.dependency import DependencyEdge
from ..platform.clients import RedisClient, RedisPipeline
from ..platform.config import Settings

logger = logging.getLogger(__name__)

# (edge id, raw record or None, parsed edge or None)
_Record = Tuple[str, Optional[str], Optional[DependencyEdge]]


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Translate client and transport failures into ``StorageError``."""

    try:
        yield
    except (UpstashError, httpx.HTTPError, OSError) as exc:
        raise StorageError(f"Failed to {action}: {exc}") from exc


class RedisEdgeStore(EdgeStore):
    """Persist dependency edges as JSON records with list-based indexes."""

    def __init__(self, redis: RedisClient, *, prefix: str = "taskdeps:") -> None:
        self._redis = redis
        self._prefix = prefix

    def _edge_key(self, edge_id: str) -> str:
        return f"{self._prefix}edge:{edge_id}"

    def _all_key(self) -> str:
        return f"{self._prefix}edges"

    def _blocking_key(self, task_id: str) -> str:
        return f"{self._prefix}blocking:{task_id}"

    def _dependent_key(self, task_id: str) -> str:
        return f"{self._prefix}dependent:{task_id}"

    async def create(self, edge: DependencyEdge) -> str:
        pipeline = self._redis.multi()
        pipeline.set(self._edge_key(edge.id), edge.model_dump_json())
        pipeline.rpush(self._all_key(), edge.id)
        pipeline.rpush(self._blocking_key(edge.blocking_task_id), edge.id)
        pipeline.rpush(self._dependent_key(edge.dependent_task_id), edge.id)
        with storage_errors(f"create dependency {edge.id}"):
            await pipeline.exec()
        return edge.id

    async def remove(self, edge_id: str) -> bool:
        """Delete the record and its index entries.

        Existence is decided by the stored key, not by whether the record
        still parses, so corrupted records can be removed too. An id that is
        only left in the ``edges`` index counts as removed once it is purged.
        """

        with storage_errors(f"read dependency {edge_id}"):
            raw = await self._redis.get(self._edge_key(edge_id))

        pipeline = self._redis.multi()
        if raw is None:
            pipeline.lrem(self._all_key(), 0, edge_id)
            with storage_errors(f"remove dependency {edge_id}"):
                results = await pipeline.exec()
            purged = bool(results and results[0])
            if purged:
                logger.warning("Purged dependency %s indexed without a record", edge_id)
            return purged

        self._queue_removal(pipeline, edge_id, *self._endpoints(edge_id, raw))
        with storage_errors(f"remove dependency {edge_id}"):
            await pipeline.exec()
        return True

    async def get(self, edge_id: str) -> Optional[DependencyEdge]:
        with storage_errors(f"read dependency {edge_id}"):
            raw = await self._redis.get(self._edge_key(edge_id))
        if raw is None:
            return None
        return self._parse(edge_id, raw)

    async def list_all(self) -> List[DependencyEdge]:
        return await self._load_index(self._all_key())

    async def list_by_blocking(self, task_id: str) -> List[DependencyEdge]:
        return await self._load_index(self._blocking_key(task_id), sweep=True)

    async def list_by_dependent(self, task_id: str) -> List[DependencyEdge]:
        return await self._load_index(self._dependent_key(task_id), sweep=True)

    async def list_unreadable(self) -> List[str]:
        with storage_errors(f"read index {self._all_key()}"):
            edge_ids = await self._redis.lrange(self._all_key(), 0, -1)
        records = await self._read(edge_ids)
        return [edge_id for edge_id, _, edge in records if edge is None]

    async def remove_all_for_task(self, task_id: str) -> List[DependencyEdge]:
        with storage_errors(f"read dependencies of task {task_id}"):
            blocking_ids = await self._redis.lrange(self._blocking_key(task_id), 0, -1)
            dependent_ids = await self._redis.lrange(self._dependent_key(task_id), 0, -1)
        edge_ids = list(dict.fromkeys([*blocking_ids, *dependent_ids]))
        records = await self._read(edge_ids)

        pipeline = self._redis.multi()
        removed: List[DependencyEdge] = []
        for edge_id, raw, edge in records:
            if edge is not None:
                removed.append(edge)
                endpoints = (edge.blocking_task_id, edge.dependent_task_id)
            elif raw is not None:
                endpoints = self._endpoints(edge_id, raw)
            else:
                endpoints = (None, None)
            self._queue_removal(pipeline, edge_id, *endpoints)
        pipeline.delete(self._blocking_key(task_id), self._dependent_key(task_id))
        with storage_errors(f"remove dependencies of task {task_id}"):
            await pipeline.exec()
        return removed

    def _queue_removal(
        self,
        pipeline: RedisPipeline,
        edge_id: str,
        blocking_task_id: Optional[str],
        dependent_task_id: Optional[str],
    ) -> None:
        pipeline.delete(self._edge_key(edge_id))
        pipeline.lrem(self._all_key(), 0, edge_id)
        if blocking_task_id is not None:
            pipeline.lrem(self._blocking_key(blocking_task_id), 0, edge_id)
        if dependent_task_id is not None:
            pipeline.lrem(self._dependent_key(dependent_task_id), 0, edge_id)

    async def _load_index(self, key: str, *, sweep: bool = False) -> List[DependencyEdge]:
        """Load the edges listed under ``key``.

        With ``sweep`` set, ids whose record no longer exists are dropped from
        the index. Records are only ever written together with their index
        entries, so such an id cannot come back.
        """

        with storage_errors(f"read index {key}"):
            edge_ids = await self._redis.lrange(key, 0, -1)
        records = await self._read(edge_ids)

        missing = [edge_id for edge_id, raw, _ in records if raw is None]
        if sweep and missing:
            pipeline = self._redis.multi()
            for edge_id in missing:
                pipeline.lrem(key, 0, edge_id)
            with storage_errors(f"sweep index {key}"):
                await pipeline.exec()
            logger.warning("Swept %d dangling ids from %s", len(missing), key)
        return [edge for _, _, edge in records if edge is not None]

    async def _read(self, edge_ids: Sequence[str]) -> List[_Record]:
        if not edge_ids:
            return []
        with storage_errors("read dependency records"):
            raws = await self._redis.mget(*(self._edge_key(edge_id) for edge_id in edge_ids))
        records: List[_Record] = []
        for edge_id, raw in zip(edge_ids, raws):
            if raw is None:
                logger.warning("Dependency %s is indexed but has no record", edge_id)
                records.append((edge_id, None, None))
            else:
                records.append((edge_id, raw, self._parse(edge_id, raw)))
        return records

    @staticmethod
    def _parse(edge_id: str, raw: str) -> Optional[DependencyEdge]:
        try:
            return DependencyEdge.model_validate_json(raw)
        except ValidationError:
            logger.warning("Skipping unreadable dependency record %s", edge_id)
            return None

    @classmethod
    def _endpoints(cls, edge_id: str, raw: str) -> Tuple[Optional[str], Optional[str]]:
        """Recover endpoint ids from a record, even one that fails validation."""

        edge = cls._parse(edge_id, raw)
        if edge is not None:
            return edge.blocking_task_id, edge.dependent_task_id
        try:
            data = json.loads(raw)
        except ValueError:
            return None, None
        if not isinstance(data, dict):
            return None, None
        blocking = data.get("blocking_task_id")
        dependent = data.get("dependent_task_id")
        return (
            blocking if isinstance(blocking, str) else None,
            dependent if isinstance(dependent, str) else None,
        )


def create_redis_edge_store(*, redis: RedisClient, settings: Settings) -> EdgeStore:
    """Create a Redis edge store without relying on FastAPI wiring."""
    return RedisEdgeStore(redis, prefix=settings.redis_key_prefix)
