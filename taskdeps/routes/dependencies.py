from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..application.service import DependencyService
from ..domain.errors import DependencyError
from ..models.dependency import (
    DependencyCreateRequest,
    DependencyEdge,
    IntegrityReport,
    ValidationResult,
)
from ..models.responses import OperationStatus
from ..platform.wiring import get_dependency_service
from .utils import to_http_exception

router: APIRouter = APIRouter()


@router.get("/dependencies", response_model=List[DependencyEdge])
async def list_dependencies(
    service: DependencyService = Depends(get_dependency_service),
) -> List[DependencyEdge]:
    try:
        return await service.list_dependencies()
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.post("/dependencies", response_model=DependencyEdge, status_code=201)
async def add_dependency(
    request: DependencyCreateRequest,
    service: DependencyService = Depends(get_dependency_service),
) -> DependencyEdge:
    try:
        return await service.add_dependency(
            request.dependent_task_id,
            request.blocking_task_id,
            created_by=request.created_by,
        )
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.post("/dependencies/validate", response_model=ValidationResult)
async def validate_dependency(
    request: DependencyCreateRequest,
    service: DependencyService = Depends(get_dependency_service),
) -> ValidationResult:
    try:
        return await service.can_add_dependency(
            request.dependent_task_id, request.blocking_task_id
        )
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.get("/dependencies/integrity", response_model=IntegrityReport)
async def audit_dependencies(
    service: DependencyService = Depends(get_dependency_service),
) -> IntegrityReport:
    try:
        return await service.audit()
    except DependencyError as exc:
        raise to_http_exception(exc) from exc


@router.delete("/dependencies/{edge_id}", response_model=OperationStatus)
async def remove_dependency(
    edge_id: str,
    service: DependencyService = Depends(get_dependency_service),
) -> OperationStatus:
    try:
        await service.remove_dependency(edge_id)
    except DependencyError as exc:
        raise to_http_exception(exc) from exc
    return OperationStatus(status="deleted", id=edge_id)
