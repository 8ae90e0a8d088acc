"""Typed errors raised by the dependency engine."""

from __future__ import annotations

from typing import ClassVar, Dict, Iterable, Optional

from ..models.dependency import DependencyErrorCode, ValidationResult

ERROR_MESSAGES: Dict[DependencyErrorCode, str] = {
    DependencyErrorCode.SELF_REFERENCE: "A task cannot depend on itself",
    DependencyErrorCode.DUPLICATE: "This dependency already exists",
    DependencyErrorCode.LIMIT_EXCEEDED: "Maximum of {limit} dependencies per task reached",
    DependencyErrorCode.CIRCULAR: "This would create a circular dependency",
    DependencyErrorCode.TASK_NOT_FOUND: "One or both tasks do not exist",
    DependencyErrorCode.NOT_FOUND: "Dependency not found",
    DependencyErrorCode.STORAGE: "Dependency storage is unavailable",
}


class DependencyError(Exception):
    """Base class for every failure reported by the engine."""

    code: ClassVar[DependencyErrorCode]

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or ERROR_MESSAGES[self.code]
        super().__init__(self.message)


class DependencyValidationError(DependencyError):
    """Recoverable rejection detected before anything is written."""

    def to_result(self) -> ValidationResult:
        return ValidationResult(valid=False, error=self.code, message=self.message)


class SelfDependencyError(DependencyValidationError):
    code = DependencyErrorCode.SELF_REFERENCE


class DuplicateDependencyError(DependencyValidationError):
    code = DependencyErrorCode.DUPLICATE


class LimitExceededError(DependencyValidationError):
    code = DependencyErrorCode.LIMIT_EXCEEDED

    def __init__(self, message: Optional[str] = None, *, limit: int = 10) -> None:
        self.limit = limit
        super().__init__(message or ERROR_MESSAGES[self.code].format(limit=limit))


class CycleDetectedError(DependencyValidationError):
    code = DependencyErrorCode.CIRCULAR

    def __init__(self, message: Optional[str] = None, *, path: Iterable[str] = ()) -> None:
        self.path = list(path)
        super().__init__(message)

    def to_result(self) -> ValidationResult:
        return ValidationResult(
            valid=False, error=self.code, message=self.message, path=self.path
        )


class TaskNotFoundError(DependencyValidationError):
    code = DependencyErrorCode.TASK_NOT_FOUND

    def __init__(self, message: Optional[str] = None, *, task_ids: Iterable[str] = ()) -> None:
        self.task_ids = list(task_ids)
        super().__init__(message)


class EdgeNotFoundError(DependencyError):
    code = DependencyErrorCode.NOT_FOUND

    def __init__(self, message: Optional[str] = None, *, edge_id: str = "") -> None:
        self.edge_id = edge_id
        super().__init__(message)


class StorageError(DependencyError):
    """Raised when the persistence collaborator fails."""

    code = DependencyErrorCode.STORAGE


_VALIDATION_ERRORS: Dict[DependencyErrorCode, type[DependencyValidationError]] = {
    cls.code: cls
    for cls in (
        SelfDependencyError,
        DuplicateDependencyError,
        LimitExceededError,
        CycleDetectedError,
        TaskNotFoundError,
    )
}


def error_from_result(result: ValidationResult) -> DependencyValidationError:
    """Build the typed exception matching a failed ``ValidationResult``."""

    if result.valid or result.error is None:
        raise ValueError("Cannot build an error from a successful validation result.")
    error_cls = _VALIDATION_ERRORS[result.error]
    if error_cls is CycleDetectedError:
        return CycleDetectedError(result.message, path=result.path)
    return error_cls(result.message)


__all__ = [
    "ERROR_MESSAGES",
    "CycleDetectedError",
    "DependencyError",
    "DependencyValidationError",
    "DuplicateDependencyError",
    "EdgeNotFoundError",
    "LimitExceededError",
    "SelfDependencyError",
    "StorageError",
    "TaskNotFoundError",
    "error_from_result",
]
