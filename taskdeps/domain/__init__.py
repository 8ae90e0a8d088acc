"""Pure graph logic: validation, status derivation, traversal and audits."""

from .errors import (
    CycleDetectedError,
    DependencyError,
    DependencyValidationError,
    DuplicateDependencyError,
    EdgeNotFoundError,
    LimitExceededError,
    SelfDependencyError,
    StorageError,
    TaskNotFoundError,
)
from .integrity import audit_edges
from .status import blocked_by, blocks, dependency_count, dependency_info, is_blocked
from .traversal import downstream, upstream
from .validator import can_add, find_cycle_path, format_cycle_path

__all__ = [
    "CycleDetectedError",
    "DependencyError",
    "DependencyValidationError",
    "DuplicateDependencyError",
    "EdgeNotFoundError",
    "LimitExceededError",
    "SelfDependencyError",
    "StorageError",
    "TaskNotFoundError",
    "audit_edges",
    "blocked_by",
    "blocks",
    "can_add",
    "dependency_count",
    "dependency_info",
    "downstream",
    "find_cycle_path",
    "format_cycle_path",
    "is_blocked",
    "upstream",
]
