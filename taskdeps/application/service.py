"""Public facade of the dependency engine.

The only entry point external collaborators call. Mutations are serialized
through a single writer lock: the degree and cycle checks read the edge set
before writing, and two interleaved adds could otherwise both pass against
stale state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from ..domain.adjacency import index_dependents
from ..domain.errors import (
    EdgeNotFoundError,
    SelfDependencyError,
    TaskNotFoundError,
    error_from_result,
)
from ..domain.integrity import audit_edges
from ..domain.status import blocked_by, dependency_count, dependency_info
from ..domain.traversal import downstream, reachable_ids, upstream
from ..domain.validator import DEFAULT_MAX_DEPENDENCIES, can_add
from ..models.dependency import (
    ChainEntry,
    DependencyEdge,
    DependencyInfo,
    IntegrityReport,
    ValidationResult,
)
from ..models.task import Task
from .ports import EdgeStore, TaskReader

logger = logging.getLogger(__name__)


class DependencyService:
    """Compose validation, persistence and graph queries for task dependencies."""

    def __init__(
        self,
        store: EdgeStore,
        tasks: TaskReader,
        *,
        max_dependencies: int = DEFAULT_MAX_DEPENDENCIES,
        lock: Optional[asyncio.Lock] = None,
    ) -> None:
        self._store = store
        self._tasks = tasks
        self._max_dependencies = max_dependencies
        self._write_lock = lock or asyncio.Lock()

    @property
    def max_dependencies(self) -> int:
        return self._max_dependencies

    # Mutations

    async def add_dependency(
        self,
        dependent_task_id: str,
        blocking_task_id: str,
        *,
        created_by: Optional[str] = None,
    ) -> DependencyEdge:
        """Declare that ``dependent_task_id`` is blocked by ``blocking_task_id``.

        Raises the specific ``DependencyValidationError`` subclass when the
        edge is rejected; storage is untouched in that case.
        """

        async with self._write_lock:
            result = await self._validate(dependent_task_id, blocking_task_id)
            if not result.valid:
                logger.info(
                    "Rejected dependency %s -> %s: %s",
                    blocking_task_id,
                    dependent_task_id,
                    result.error.value if result.error else "unknown",
                )
                raise error_from_result(result)

            edge = DependencyEdge(
                blocking_task_id=blocking_task_id,
                dependent_task_id=dependent_task_id,
                created_by=created_by,
            )
            await self._store.create(edge)
            logger.info(
                "Added dependency %s: %s blocks %s", edge.id, blocking_task_id, dependent_task_id
            )
            return edge

    async def remove_dependency(self, edge_id: str) -> None:
        async with self._write_lock:
            removed = await self._store.remove(edge_id)
        if not removed:
            raise EdgeNotFoundError(edge_id=edge_id)
        logger.info("Removed dependency %s", edge_id)

    async def remove_all_edges_for_task(self, task_id: str) -> int:
        """Drop every edge touching ``task_id``; used when the task is deleted."""

        async with self._write_lock:
            removed = await self._store.remove_all_for_task(task_id)
        logger.info("Removed %d dependencies of deleted task %s", len(removed), task_id)
        return len(removed)

    # Validation

    async def can_add_dependency(
        self, dependent_task_id: str, blocking_task_id: str
    ) -> ValidationResult:
        """Pre-validate an edge without writing anything."""

        return await self._validate(dependent_task_id, blocking_task_id)

    async def _validate(
        self, dependent_task_id: str, blocking_task_id: str
    ) -> ValidationResult:
        if dependent_task_id == blocking_task_id:
            return SelfDependencyError().to_result()

        dependent, blocking = await asyncio.gather(
            self._tasks.get_task(dependent_task_id),
            self._tasks.get_task(blocking_task_id),
        )
        missing = [
            task_id
            for task_id, task in ((dependent_task_id, dependent), (blocking_task_id, blocking))
            if task is None
        ]
        if missing:
            return TaskNotFoundError(task_ids=missing).to_result()

        edges = await self._store.list_all()
        return can_add(
            blocking_task_id,
            dependent_task_id,
            edges,
            dependency_count(dependent_task_id, edges),
            max_dependencies=self._max_dependencies,
        )

    def get_available_blockers(
        self, task_id: str, all_tasks: Sequence[Task], edges: Sequence[DependencyEdge]
    ) -> List[Task]:
        """Tasks that could legally be added as a new blocker of ``task_id``.

        A candidate closes a cycle exactly when it is already downstream of
        ``task_id``, so one downstream walk replaces a cycle search per
        candidate.
        """

        if dependency_count(task_id, edges) >= self._max_dependencies:
            return []
        existing = set(blocked_by(task_id, edges))
        downstream_ids = reachable_ids(task_id, index_dependents(edges))
        return [
            task
            for task in all_tasks
            if task.id != task_id and task.id not in existing and task.id not in downstream_ids
        ]

    # Queries

    async def list_dependencies(self) -> List[DependencyEdge]:
        return await self._store.list_all()

    async def get_dependency(self, edge_id: str) -> DependencyEdge:
        edge = await self._store.get(edge_id)
        if edge is None:
            raise EdgeNotFoundError(edge_id=edge_id)
        return edge

    async def _load_graph(self) -> tuple[List[DependencyEdge], Dict[str, Task]]:
        edges, tasks = await asyncio.gather(self._store.list_all(), self._tasks.list_tasks())
        return edges, {task.id: task for task in tasks}

    async def dependency_info(self, task_id: str) -> DependencyInfo:
        edges, tasks = await self._load_graph()
        return dependency_info(task_id, edges, tasks)

    async def upstream(self, task_id: str) -> List[ChainEntry]:
        edges, tasks = await self._load_graph()
        return upstream(task_id, edges, tasks)

    async def downstream(self, task_id: str) -> List[ChainEntry]:
        edges, tasks = await self._load_graph()
        return downstream(task_id, edges, tasks)

    async def available_blockers(self, task_id: str) -> List[Task]:
        edges, tasks = await asyncio.gather(self._store.list_all(), self._tasks.list_tasks())
        return self.get_available_blockers(task_id, tasks, edges)

    async def audit(self) -> IntegrityReport:
        (edges, tasks), unreadable = await asyncio.gather(
            self._load_graph(), self._store.list_unreadable()
        )
        return audit_edges(
            edges,
            max_dependencies=self._max_dependencies,
            known_task_ids=set(tasks),
            unreadable_records=unreadable,
        )


__all__ = ["DependencyService"]
