"""Per-task dependency views exposed over HTTP."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio

from taskdeps.models import TaskStatus
from taskdeps.platform.config import Settings
from tests.api.helpers import auth_headers, make_dependency_payload
from tests.builders import make_task
from tests.conftest import seed_tasks
from tests.fakes import RedisFake

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def chain(client: httpx.AsyncClient, redis_fake: RedisFake, settings: Settings) -> None:
    """Design blocks Build, Build blocks Review; Docs is unrelated."""

    seed_tasks(
        redis_fake,
        settings,
        make_task("design", TaskStatus.COMPLETED),
        make_task("build", TaskStatus.IN_PROGRESS),
        make_task("review"),
        make_task("docs"),
    )
    for dependent, blocking in (("build", "design"), ("review", "build")):
        response = await client.post(
            "/v2/dependencies",
            json=make_dependency_payload(dependent, blocking),
            headers=auth_headers(settings),
        )
        assert response.status_code == 201


async def test_dependency_info(client: httpx.AsyncClient, settings: Settings, chain: None) -> None:
    review = await client.get("/v2/tasks/review/dependency-info", headers=auth_headers(settings))
    build = await client.get("/v2/tasks/build/dependency-info", headers=auth_headers(settings))

    assert review.status_code == 200
    assert review.json()["is_blocked"] is True
    assert review.json()["dependency_status"] == "blocked"
    assert [task["id"] for task in review.json()["blocked_by"]] == ["build"]

    assert build.json()["is_blocked"] is False
    assert build.json()["dependency_status"] == "blocking"
    assert build.json()["blocks_ids"] == ["review"]


@pytest.mark.parametrize(
    ("task_id", "direction", "expected"),
    [
        pytest.param("review", "upstream", [["build", 1], ["design", 2]], id="upstream"),
        pytest.param("design", "downstream", [["build", 1], ["review", 2]], id="downstream"),
        pytest.param("docs", "upstream", [], id="isolated"),
    ],
)
async def test_chain(
    client: httpx.AsyncClient,
    settings: Settings,
    chain: None,
    task_id: str,
    direction: str,
    expected: list[list[object]],
) -> None:
    response = await client.get(
        f"/v2/tasks/{task_id}/chain",
        params={"direction": direction},
        headers=auth_headers(settings),
    )

    assert response.status_code == 200
    assert [[entry["task"]["id"], entry["depth"]] for entry in response.json()] == expected


async def test_chain_rejects_unknown_direction(
    client: httpx.AsyncClient, settings: Settings, chain: None
) -> None:
    response = await client.get(
        "/v2/tasks/review/chain",
        params={"direction": "sideways"},
        headers=auth_headers(settings),
    )

    assert response.status_code == 422


async def test_available_blockers_exclude_downstream_tasks(
    client: httpx.AsyncClient, settings: Settings, chain: None
) -> None:
    response = await client.get(
        "/v2/tasks/design/available-blockers", headers=auth_headers(settings)
    )

    assert response.status_code == 200
    assert [task["id"] for task in response.json()] == ["docs"]


async def test_delete_task_dependencies(
    client: httpx.AsyncClient, settings: Settings, chain: None
) -> None:
    response = await client.delete("/v2/tasks/build/dependencies", headers=auth_headers(settings))

    assert response.status_code == 200
    assert response.json() == {"status": "deleted", "id": "build", "count": 2}

    listing = await client.get("/v2/dependencies", headers=auth_headers(settings))
    assert listing.json() == []
