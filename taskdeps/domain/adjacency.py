"""Adjacency indexes over an edge list, preserving edge insertion order."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..models.dependency import DependencyEdge

# task id -> [(neighbour task id, edge id), ...]
Adjacency = Dict[str, List[Tuple[str, str]]]


def index_blockers(edges: Iterable[DependencyEdge]) -> Adjacency:
    """Map each dependent task to the tasks blocking it."""

    index: Adjacency = {}
    for edge in edges:
        index.setdefault(edge.dependent_task_id, []).append(
            (edge.blocking_task_id, edge.id)
        )
    return index


def index_dependents(edges: Iterable[DependencyEdge]) -> Adjacency:
    """Map each blocking task to the tasks it blocks."""

    index: Adjacency = {}
    for edge in edges:
        index.setdefault(edge.blocking_task_id, []).append(
            (edge.dependent_task_id, edge.id)
        )
    return index
