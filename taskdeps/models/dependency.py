from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .task import Task


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DependencyErrorCode(str, Enum):
    """Machine-readable reasons a dependency operation can fail."""

    SELF_REFERENCE = "self_reference"
    DUPLICATE = "duplicate"
    LIMIT_EXCEEDED = "limit_exceeded"
    CIRCULAR = "circular"
    TASK_NOT_FOUND = "task_not_found"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


class DependencyStatus(str, Enum):
    """Summary badge for a task's position in the dependency graph."""

    BLOCKED = "blocked"
    BLOCKING = "blocking"
    READY = "ready"


class DependencyEdge(BaseModel):
    """Directed arc ``blocking_task_id -> dependent_task_id``.

    The dependent task cannot proceed until the blocking task is completed.
    Edges are immutable; a change is modelled as remove + add.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    blocking_task_id: str = Field(..., description="Task that must complete first.")
    dependent_task_id: str = Field(..., description="Task waiting on the blocker.")
    created_at: datetime = Field(default_factory=_utcnow)
    created_by: Optional[str] = Field(None, description="User that declared the dependency.")

    model_config = ConfigDict(frozen=True)


class ChainEntry(BaseModel):
    """A task reached while walking a dependency chain."""

    task: Task
    depth: int = Field(..., ge=1, description="Shortest distance from the starting task.")
    dependency_id: str = Field(..., description="Edge through which the task was first reached.")


class ValidationResult(BaseModel):
    """Outcome of checking whether a dependency may be added."""

    valid: bool
    error: Optional[DependencyErrorCode] = None
    message: Optional[str] = None
    path: List[str] = Field(default_factory=list)

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)


class DependencyInfo(BaseModel):
    """Direct dependency status of a single task."""

    task_id: str
    is_blocked: bool = False
    blocked_by: List[Task] = Field(
        default_factory=list, description="Direct blockers that are not completed."
    )
    blocked_by_ids: List[str] = Field(default_factory=list)
    blocks: List[Task] = Field(default_factory=list)
    blocks_ids: List[str] = Field(default_factory=list)
    dependency_status: Optional[DependencyStatus] = None
    dependency_count: int = 0


class IntegrityReport(BaseModel):
    """Invariant violations found in a persisted edge set."""

    valid: bool
    self_loops: List[str] = Field(default_factory=list, description="Edge ids.")
    duplicate_pairs: List[List[str]] = Field(
        default_factory=list, description="[blocking, dependent] pairs stored more than once."
    )
    cycles: List[List[str]] = Field(
        default_factory=list, description="Task ids of each strongly connected component."
    )
    over_limit: Dict[str, int] = Field(default_factory=dict)
    dangling_edges: List[str] = Field(default_factory=list)
    unreadable_records: List[str] = Field(
        default_factory=list, description="Indexed edge ids whose record is missing or corrupt."
    )


class DependencyCreateRequest(BaseModel):
    """Payload used to declare that one task is blocked by another."""

    dependent_task_id: str = Field(..., min_length=1)
    blocking_task_id: str = Field(..., min_length=1)
    created_by: Optional[str] = None
