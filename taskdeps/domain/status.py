"""Direct blocked/blocking status derived from the edge set."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Sequence, Set

from ..models.dependency import DependencyEdge, DependencyInfo, DependencyStatus
from ..models.task import Task


def blocked_by(task_id: str, edges: Iterable[DependencyEdge]) -> List[str]:
    """Return the ids of tasks directly blocking ``task_id``."""

    return [edge.blocking_task_id for edge in edges if edge.dependent_task_id == task_id]


def blocks(task_id: str, edges: Iterable[DependencyEdge]) -> List[str]:
    """Return the ids of tasks directly blocked by ``task_id``."""

    return [edge.dependent_task_id for edge in edges if edge.blocking_task_id == task_id]


def dependency_count(task_id: str, edges: Iterable[DependencyEdge]) -> int:
    return len(blocked_by(task_id, edges))


def _incomplete(task_ids: Iterable[str], tasks: Mapping[str, Task]) -> List[Task]:
    result: List[Task] = []
    for task_id in task_ids:
        task = tasks.get(task_id)
        if task is not None and not task.is_completed:
            result.append(task)
    return result


def is_blocked(
    task_id: str, edges: Iterable[DependencyEdge], tasks: Mapping[str, Task]
) -> bool:
    """Whether any direct blocker of ``task_id`` is still incomplete.

    Only direct edges count. Blockers missing from ``tasks`` are ignored.
    """

    return bool(_incomplete(blocked_by(task_id, edges), tasks))


def dependency_info(
    task_id: str, edges: Sequence[DependencyEdge], tasks: Mapping[str, Task]
) -> DependencyInfo:
    blocker_ids = blocked_by(task_id, edges)
    dependent_ids = blocks(task_id, edges)
    incomplete = _incomplete(blocker_ids, tasks)
    dependents = [tasks[dep_id] for dep_id in dependent_ids if dep_id in tasks]

    status = None
    if incomplete:
        status = DependencyStatus.BLOCKED
    elif dependents:
        status = DependencyStatus.BLOCKING
    elif blocker_ids:
        status = DependencyStatus.READY

    return DependencyInfo(
        task_id=task_id,
        is_blocked=bool(incomplete),
        blocked_by=incomplete,
        blocked_by_ids=blocker_ids,
        blocks=dependents,
        blocks_ids=dependent_ids,
        dependency_status=status,
        dependency_count=len(blocker_ids),
    )


def build_dependency_map(
    edges: Sequence[DependencyEdge], tasks: Mapping[str, Task]
) -> Dict[str, DependencyInfo]:
    """Compute ``dependency_info`` for every known task."""

    return {task_id: dependency_info(task_id, edges, tasks) for task_id in tasks}


def blocked_task_ids(
    task_ids: Iterable[str], edges: Iterable[DependencyEdge], tasks: Mapping[str, Task]
) -> Set[str]:
    """Return the subset of ``task_ids`` that currently have an incomplete blocker."""

    wanted = set(task_ids)
    blocked: Set[str] = set()
    for edge in edges:
        if edge.dependent_task_id not in wanted:
            continue
        blocker = tasks.get(edge.blocking_task_id)
        if blocker is not None and not blocker.is_completed:
            blocked.add(edge.dependent_task_id)
    return blocked


__all__ = [
    "blocked_by",
    "blocked_task_ids",
    "blocks",
    "build_dependency_map",
    "dependency_count",
    "dependency_info",
    "is_blocked",
]
