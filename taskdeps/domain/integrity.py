"""Audit a persisted edge set against the graph invariants."""

from __future__ import annotations

from collections import Counter
from typing import AbstractSet, Optional, Sequence

import networkx as nx

from ..models.dependency import DependencyEdge, IntegrityReport
from .validator import DEFAULT_MAX_DEPENDENCIES


def build_graph(edges: Sequence[DependencyEdge]) -> nx.DiGraph:
    """Create a NetworkX graph with one arc per distinct blocking/dependent pair."""

    graph = nx.DiGraph()
    for edge in edges:
        graph.add_edge(edge.blocking_task_id, edge.dependent_task_id, edge_id=edge.id)
    return graph


def audit_edges(
    edges: Sequence[DependencyEdge],
    *,
    max_dependencies: int = DEFAULT_MAX_DEPENDENCIES,
    known_task_ids: Optional[AbstractSet[str]] = None,
    unreadable_records: Sequence[str] = (),
) -> IntegrityReport:
    """Report every invariant violation present in ``edges``.

    ``known_task_ids`` enables the dangling-reference check; leave it ``None``
    when the task directory is unavailable. ``unreadable_records`` are ids the
    store could not turn into edges; any of them makes the report invalid.
    """

    graph = build_graph(edges)

    self_loops = [edge.id for edge in edges if edge.blocking_task_id == edge.dependent_task_id]

    pair_counts = Counter((edge.blocking_task_id, edge.dependent_task_id) for edge in edges)
    duplicate_pairs = [list(pair) for pair, count in pair_counts.items() if count > 1]

    cycles = [
        sorted(component)
        for component in nx.strongly_connected_components(graph)
        if len(component) > 1
    ]
    cycles.sort()

    degrees = Counter(edge.dependent_task_id for edge in edges)
    over_limit = {
        task_id: degree for task_id, degree in degrees.items() if degree > max_dependencies
    }

    dangling: list[str] = []
    if known_task_ids is not None:
        dangling = [
            edge.id
            for edge in edges
            if edge.blocking_task_id not in known_task_ids
            or edge.dependent_task_id not in known_task_ids
        ]

    valid = not (
        self_loops or duplicate_pairs or cycles or over_limit or dangling or unreadable_records
    )
    return IntegrityReport(
        valid=valid,
        self_loops=self_loops,
        duplicate_pairs=duplicate_pairs,
        cycles=cycles,
        over_limit=over_limit,
        dangling_edges=dangling,
        unreadable_records=list(unreadable_records),
    )


__all__ = ["audit_edges", "build_graph"]
