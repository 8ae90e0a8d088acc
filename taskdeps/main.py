from __future__ import annotations

from typing import Any, Dict

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .platform.security import verify_api_key
from .routes.dependencies import router as dependencies_router
from .routes.tasks import router as tasks_router

app: FastAPI = FastAPI(
    title="Task Dependency Engine",
    version="1.0.0",
    description="Validates and queries blocked-by relations between tasks",
)


@app.api_route("/", methods=["GET", "HEAD"], include_in_schema=False)
@app.api_route("/healthz", methods=["GET", "HEAD"], include_in_schema=False)
async def healthz() -> dict[str, str]:
    """Lightweight endpoint used for health checks."""
    return {"status": "ok"}


@app.get("/v2/api-schema")
async def get_api_schema(request: Request, _: Any = Depends(verify_api_key)) -> JSONResponse:
    """Return the OpenAPI schema for this API version."""
    openapi_schema: Dict[str, Any] = request.app.openapi()
    return JSONResponse(openapi_schema)


for router in (dependencies_router, tasks_router):
    app.include_router(router, prefix="/v2", dependencies=[Depends(verify_api_key)])
