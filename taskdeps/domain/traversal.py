"""Breadth-first walks over the transitive dependency chain."""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Mapping, Sequence, Set, Tuple

from ..models.dependency import ChainEntry, DependencyEdge
from ..models.task import Task
from .adjacency import Adjacency, index_blockers, index_dependents


def _walk(task_id: str, adjacency: Adjacency, tasks: Mapping[str, Task]) -> List[ChainEntry]:
    visited: Set[str] = {task_id}
    frontier: Deque[Tuple[str, int]] = deque([(task_id, 0)])
    chain: List[ChainEntry] = []
    while frontier:
        current, depth = frontier.popleft()
        for neighbour_id, edge_id in adjacency.get(current, ()):
            if neighbour_id in visited:
                continue
            visited.add(neighbour_id)
            task = tasks.get(neighbour_id)
            if task is None:
                continue
            chain.append(ChainEntry(task=task, depth=depth + 1, dependency_id=edge_id))
            frontier.append((neighbour_id, depth + 1))
    return chain


def upstream(
    task_id: str, edges: Sequence[DependencyEdge], tasks: Mapping[str, Task]
) -> List[ChainEntry]:
    """Every task that transitively blocks ``task_id``, nearest first.

    Each task appears once, at the depth it was first reached. Ties keep edge
    insertion order. Terminates on cyclic input.
    """

    return _walk(task_id, index_blockers(edges), tasks)


def downstream(
    task_id: str, edges: Sequence[DependencyEdge], tasks: Mapping[str, Task]
) -> List[ChainEntry]:
    """Every task transitively blocked by ``task_id``, nearest first."""

    return _walk(task_id, index_dependents(edges), tasks)


def reachable_ids(task_id: str, adjacency: Adjacency) -> Set[str]:
    """Ids reachable from ``task_id`` through ``adjacency``, excluding itself."""

    visited: Set[str] = {task_id}
    frontier: Deque[str] = deque([task_id])
    while frontier:
        current = frontier.popleft()
        for neighbour_id, _ in adjacency.get(current, ()):
            if neighbour_id not in visited:
                visited.add(neighbour_id)
                frontier.append(neighbour_id)
    visited.discard(task_id)
    return visited


__all__ = ["downstream", "reachable_ids", "upstream"]
