from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import HTTPException

from ..domain.errors import (
    CycleDetectedError,
    DependencyError,
    DependencyValidationError,
    EdgeNotFoundError,
    StorageError,
    TaskNotFoundError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: DependencyError) -> HTTPException:
    """Map an engine error onto the HTTP error payload rendered by the UI."""

    detail: Dict[str, Any] = {"error": exc.code.value, "message": exc.message}
    if isinstance(exc, CycleDetectedError):
        detail["path"] = exc.path

    if isinstance(exc, (TaskNotFoundError, EdgeNotFoundError)):
        status_code = 404
    elif isinstance(exc, DependencyValidationError):
        status_code = 409
    elif isinstance(exc, StorageError):
        logger.exception("Dependency storage failure: %s", exc.message)
        status_code = 503
    else:  # pragma: no cover - every engine error is mapped above
        status_code = 500
    return HTTPException(status_code=status_code, detail=detail)
