from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TaskStatus(str, Enum):
    """Lifecycle states a task collaborator may report."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(BaseModel):
    """Read-only view of a task owned by the task collaborator."""

    id: str
    status: TaskStatus = TaskStatus.PENDING
    name: str = Field("", description="Display name used when rendering dependency chains.")

    model_config = ConfigDict(frozen=True)

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED
