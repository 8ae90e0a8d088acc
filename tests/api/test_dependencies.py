"""Dependency endpoints exercised through the ASGI app."""

from __future__ import annotations

import httpx
import pytest
from upstash_redis.errors import UpstashError

from taskdeps.models import TaskStatus
from taskdeps.platform.config import Settings
from tests.api.helpers import auth_headers, make_dependency_payload
from tests.builders import make_edge, make_task
from tests.conftest import seed_tasks
from tests.fakes import RedisFake

pytestmark = pytest.mark.asyncio


@pytest.fixture
def seeded(redis_fake: RedisFake, settings: Settings) -> RedisFake:
    seed_tasks(
        redis_fake,
        settings,
        make_task("design", TaskStatus.COMPLETED, name="Design"),
        make_task("build", name="Build"),
        make_task("review", name="Review"),
    )
    return redis_fake


async def test_create_and_list_dependency(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    response = await client.post(
        "/v2/dependencies",
        json=make_dependency_payload("build", "design", created_by="alice"),
        headers=auth_headers(settings),
    )

    assert response.status_code == 201
    created = response.json()
    assert created["blocking_task_id"] == "design"
    assert created["dependent_task_id"] == "build"
    assert created["created_by"] == "alice"

    listing = await client.get("/v2/dependencies", headers=auth_headers(settings))
    assert listing.status_code == 200
    assert [edge["id"] for edge in listing.json()] == [created["id"]]


async def test_cycle_is_reported_with_path(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    for dependent, blocking in (("build", "design"), ("review", "build")):
        response = await client.post(
            "/v2/dependencies",
            json=make_dependency_payload(dependent, blocking),
            headers=auth_headers(settings),
        )
        assert response.status_code == 201

    response = await client.post(
        "/v2/dependencies",
        json=make_dependency_payload("design", "review"),
        headers=auth_headers(settings),
    )

    assert response.status_code == 409
    assert response.json() == {
        "detail": {
            "error": "circular",
            "message": "This would create a circular dependency",
            "path": ["review", "build", "design"],
        }
    }


@pytest.mark.parametrize(
    ("payload", "expected_status", "expected_error"),
    [
        pytest.param(make_dependency_payload("build", "build"), 409, "self_reference", id="self"),
        pytest.param(make_dependency_payload("build", "ghost"), 404, "task_not_found", id="missing"),
    ],
)
async def test_rejected_dependency_errors(
    client: httpx.AsyncClient,
    settings: Settings,
    seeded: RedisFake,
    payload: dict[str, str],
    expected_status: int,
    expected_error: str,
) -> None:
    response = await client.post("/v2/dependencies", json=payload, headers=auth_headers(settings))

    assert response.status_code == expected_status
    assert response.json()["detail"]["error"] == expected_error
    assert seeded.transactions == []


async def test_empty_task_id_is_unprocessable(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    response = await client.post(
        "/v2/dependencies",
        json=make_dependency_payload("", "design"),
        headers=auth_headers(settings),
    )

    assert response.status_code == 422


async def test_validate_endpoint_reports_without_writing(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    await client.post(
        "/v2/dependencies",
        json=make_dependency_payload("build", "design"),
        headers=auth_headers(settings),
    )
    before = seeded.snapshot()

    duplicate = await client.post(
        "/v2/dependencies/validate",
        json=make_dependency_payload("build", "design"),
        headers=auth_headers(settings),
    )
    ok = await client.post(
        "/v2/dependencies/validate",
        json=make_dependency_payload("review", "build"),
        headers=auth_headers(settings),
    )

    assert duplicate.status_code == 200
    assert duplicate.json() == {
        "valid": False,
        "error": "duplicate",
        "message": "This dependency already exists",
        "path": [],
    }
    assert ok.json()["valid"] is True
    assert seeded.snapshot() == before


async def test_delete_dependency_twice(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    created = await client.post(
        "/v2/dependencies",
        json=make_dependency_payload("build", "design"),
        headers=auth_headers(settings),
    )
    edge_id = created.json()["id"]

    first = await client.delete(f"/v2/dependencies/{edge_id}", headers=auth_headers(settings))
    second = await client.delete(f"/v2/dependencies/{edge_id}", headers=auth_headers(settings))

    assert first.status_code == 200
    assert first.json() == {"status": "deleted", "id": edge_id}
    assert second.status_code == 404
    assert second.json()["detail"]["error"] == "not_found"


async def test_integrity_report(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    clean = await client.get("/v2/dependencies/integrity", headers=auth_headers(settings))
    assert clean.json()["valid"] is True

    seeded.seed("test:edge:loop", make_edge("build", "build", edge_id="loop").model_dump_json())
    seeded.seed_list("test:edges", "loop")

    response = await client.get("/v2/dependencies/integrity", headers=auth_headers(settings))

    assert response.status_code == 200
    assert response.json()["valid"] is False
    assert response.json()["self_loops"] == ["loop"]


async def test_storage_outage_returns_503(
    client: httpx.AsyncClient, settings: Settings, seeded: RedisFake
) -> None:
    seeded.fail_with = UpstashError("ERR unavailable")

    response = await client.get("/v2/dependencies", headers=auth_headers(settings))

    assert response.status_code == 503
    assert response.json()["detail"]["error"] == "storage"
