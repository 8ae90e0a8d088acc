"""Graph validation for proposed dependency edges.

Every function here is pure: it receives the current edge set and returns a
``ValidationResult`` instead of raising, so callers can render a specific
message per failure kind and tests can feed arbitrary (even corrupted) edge
sets.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Mapping, Optional, Sequence

from ..models.dependency import DependencyEdge, ValidationResult
from ..models.task import Task
from .adjacency import Adjacency, index_blockers
from .errors import (
    CycleDetectedError,
    DuplicateDependencyError,
    LimitExceededError,
    SelfDependencyError,
)

DEFAULT_MAX_DEPENDENCIES = 10


def find_cycle_path(
    blocking_task_id: str,
    dependent_task_id: str,
    edges: Sequence[DependencyEdge],
    *,
    blockers: Optional[Adjacency] = None,
) -> Optional[List[str]]:
    """Return the path that the arc ``blocking -> dependent`` would close.

    Walks breadth-first from ``blocking_task_id`` into its blockers. If
    ``dependent_task_id`` is reached, the returned list starts at the blocking
    task and ends at the dependent task. ``None`` means the arc is safe.
    """

    if blockers is None:
        blockers = index_blockers(edges)

    parents: Dict[str, Optional[str]] = {blocking_task_id: None}
    frontier: Deque[str] = deque([blocking_task_id])
    while frontier:
        current = frontier.popleft()
        if current == dependent_task_id:
            path: List[str] = []
            node: Optional[str] = current
            while node is not None:
                path.append(node)
                node = parents[node]
            path.reverse()
            return path
        for blocker_id, _ in blockers.get(current, ()):
            if blocker_id not in parents:
                parents[blocker_id] = current
                frontier.append(blocker_id)
    return None


def can_add(
    blocking_task_id: str,
    dependent_task_id: str,
    current_edges: Sequence[DependencyEdge],
    current_dependent_degree: int,
    *,
    max_dependencies: int = DEFAULT_MAX_DEPENDENCIES,
) -> ValidationResult:
    """Check whether ``dependent_task_id`` may declare ``blocking_task_id`` as a blocker.

    Checks run in a fixed order and the first failure wins: self reference,
    duplicate arc, degree limit, cycle.
    """

    if blocking_task_id == dependent_task_id:
        return SelfDependencyError().to_result()

    for edge in current_edges:
        if (
            edge.blocking_task_id == blocking_task_id
            and edge.dependent_task_id == dependent_task_id
        ):
            return DuplicateDependencyError().to_result()

    if current_dependent_degree >= max_dependencies:
        return LimitExceededError(limit=max_dependencies).to_result()

    path = find_cycle_path(blocking_task_id, dependent_task_id, current_edges)
    if path is not None:
        return CycleDetectedError(path=path).to_result()

    return ValidationResult.ok()


def format_cycle_path(path: Sequence[str], tasks: Mapping[str, Task]) -> str:
    """Render a cycle such as ``"Design → Build → Review → Design"``."""

    names = []
    for task_id in path:
        task = tasks.get(task_id)
        names.append(task.name if task is not None and task.name else task_id)
    if names:
        names.append(names[0])
    return " → ".join(names)


__all__ = [
    "DEFAULT_MAX_DEPENDENCIES",
    "can_add",
    "find_cycle_path",
    "format_cycle_path",
]
