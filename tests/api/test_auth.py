"""Authentication and schema contract tests."""

from __future__ import annotations

import httpx
import pytest
from openapi_spec_validator import validate

from taskdeps.platform.config import Settings

pytestmark = pytest.mark.asyncio


@pytest.mark.parametrize(
    ("headers", "expected_status"),
    [
        pytest.param({}, 401, id="missing"),
        pytest.param({"x-api-key": "wrong"}, 401, id="invalid"),
        pytest.param("valid", 200, id="valid"),
    ],
)
@pytest.mark.parametrize(
    "path", ["/v2/api-schema", "/v2/dependencies", "/v2/tasks/a/dependency-info"]
)
async def test_api_key_contract(
    client: httpx.AsyncClient,
    settings: Settings,
    path: str,
    headers: dict[str, str] | str,
    expected_status: int,
) -> None:
    """Every versioned endpoint enforces the x-api-key contract."""

    request_headers = (
        {"x-api-key": settings.api_key} if isinstance(headers, str) else headers
    )

    response = await client.get(path, headers=request_headers)

    assert response.status_code == expected_status
    if expected_status == 401:
        assert response.json() == {
            "detail": {"error": "unauthorized", "message": "Missing or invalid API key"}
        }


async def test_openapi_schema(client: httpx.AsyncClient, settings: Settings) -> None:
    """The generated schema defines the API key security scheme only once."""

    response = await client.get("/v2/api-schema", headers={"x-api-key": settings.api_key})

    assert response.status_code == 200
    schema = response.json()
    validate(schema)

    assert schema["components"]["securitySchemes"]["ApiKeyAuth"]["name"] == "x-api-key"
    assert "/v2/dependencies" in schema["paths"]
    for path_item in schema["paths"].values():
        for operation in path_item.values():
            if isinstance(operation, dict) and "parameters" in operation:
                assert all(parameter["name"] != "x-api-key" for parameter in operation["parameters"])
