"""Factories and request helpers for API tests."""

from __future__ import annotations

from typing import Any, Dict

from taskdeps.platform.config import Settings


def auth_headers(settings: Settings) -> Dict[str, str]:
    return {"x-api-key": settings.api_key}


def make_dependency_payload(dependent: str, blocking: str, **overrides: Any) -> Dict[str, Any]:
    """Return a dependency create payload with optional overrides."""

    payload: Dict[str, Any] = {
        "dependent_task_id": dependent,
        "blocking_task_id": blocking,
    }
    payload.update(overrides)
    return payload
