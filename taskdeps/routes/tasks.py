from __future__ import annotations

from typing import List, Literal

from fastapi import APIRouter, Depends, Query

from ..application.service import DependencyService
from ..domain.errors import DependencyError
from ..models.dependency import ChainEntry, DependencyInfo
from ..models.responses import OperationStatus
from ..models.task import Task
from ..platform.wiring import get_dependency_service
from .utils import to_http_exception

router: APIRouter = APIRouter()


@router.get("/tasks/{task_id}/dependency-info", response_model=DependencyInfo)
async def get_dependency_info(
    task_id: str,
    service: DependencyService = Depends(get_dependency_service),
) -> DependencyInfo:
    try:
        return await service.dependency_info(task_id)
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.get("/tasks/{task_id}/available-blockers", response_model=List[Task])
async def list_available_blockers(
    task_id: str,
    service: DependencyService = Depends(get_dependency_service),
) -> List[Task]:
    try:
        return await service.available_blockers(task_id)
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.get("/tasks/{task_id}/chain", response_model=List[ChainEntry])
async def get_dependency_chain(
    task_id: str,
    direction: Literal["upstream", "downstream"] = Query(
        "upstream", description="Walk blockers (upstream) or blocked tasks (downstream)."
    ),
    service: DependencyService = Depends(get_dependency_service),
) -> List[ChainEntry]:
    try:
        if direction == "downstream":
            return await service.downstream(task_id)
        return await service.upstream(task_id)
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/tasks/{task_id}/dependencies", response_model=OperationStatus)
async def remove_task_dependencies(
    task_id: str,
    service: DependencyService = Depends(get_dependency_service),
) -> OperationStatus:
    try:
        count = await service.remove_all_edges_for_task(task_id)
    except DependencyError as exc:
        raise to_http_exception(exc) from exc
    return OperationStatus(status="deleted", id=task_id, count=count)
