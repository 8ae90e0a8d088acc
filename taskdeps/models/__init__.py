from .dependency import (
    ChainEntry,
    DependencyCreateRequest,
    DependencyEdge,
    DependencyErrorCode,
    DependencyInfo,
    DependencyStatus,
    IntegrityReport,
    ValidationResult,
)
from .responses import OperationStatus
from .task import Task, TaskStatus

__all__ = [
    'ChainEntry',
    'DependencyCreateRequest',
    'DependencyEdge',
    'DependencyErrorCode',
    'DependencyInfo',
    'DependencyStatus',
    'IntegrityReport',
    'OperationStatus',
    'Task',
    'TaskStatus',
    'ValidationResult',
]
