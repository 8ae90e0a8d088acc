"""Ports the dependency service needs from storage and the task collaborator."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from ..models.dependency import DependencyEdge
from ..models.task import Task


class EdgeStore(ABC):
    """Persistence for dependency edges. Trusts its caller; validates nothing."""

    @abstractmethod
    async def create(self, edge: DependencyEdge) -> str:
        """Persist ``edge`` atomically and return its id."""

    @abstractmethod
    async def remove(self, edge_id: str) -> bool:
        """Delete an edge. Returns ``False`` when no such edge was stored."""

    @abstractmethod
    async def get(self, edge_id: str) -> Optional[DependencyEdge]:
        """Return a single edge, or ``None`` when absent."""

    @abstractmethod
    async def list_all(self) -> List[DependencyEdge]:
        """Return every edge in insertion order."""

    @abstractmethod
    async def list_by_blocking(self, task_id: str) -> List[DependencyEdge]:
        """Return edges whose blocking task is ``task_id``."""

    @abstractmethod
    async def list_by_dependent(self, task_id: str) -> List[DependencyEdge]:
        """Return edges whose dependent task is ``task_id``."""

    @abstractmethod
    async def list_unreadable(self) -> List[str]:
        """Return ids listed in the store whose record is missing or cannot be parsed."""

    @abstractmethod
    async def remove_all_for_task(self, task_id: str) -> List[DependencyEdge]:
        """Delete every edge touching ``task_id`` in one transaction."""


@runtime_checkable
class TaskReader(Protocol):
    """Read-only access to the tasks owned by the task collaborator."""

    async def get_task(self, task_id: str) -> Optional[Task]:
        """Return the task, or ``None`` if it does not exist."""

    async def list_tasks(self) -> List[Task]:
        """Return every known task."""
