from fastapi import APIRouter, Body, Depends, Query, Response, status
from typing import Any, Dict, Optional

from app.models.project.project import ProjectOut
from app.models.record.record import PaginatedRecords
from app.services.auth.api_key import require_project_api_key
from app.services.record.record import (
    create_record_helper,
    delete_record_helper,
    get_record_helper,
    list_records_helper,
    patch_record_helper,
    replace_record_helper,
)


router = APIRouter()

COLLECTION_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, x-api-key",
}

ITEM_CORS_HEADERS = {
    **COLLECTION_CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
}

# ---------- Preflight ----------

@router.options("/{project_id}/{resource}", include_in_schema=False)
async def collection_options(project_id: str, resource: str):
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=COLLECTION_CORS_HEADERS)


@router.options("/{project_id}/{resource}/{record_id}", include_in_schema=False)
async def item_options(project_id: str, resource: str, record_id: str):
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=ITEM_CORS_HEADERS)

# ---------- Records ----------

@router.get("/{project_id}/{resource}", response_model=PaginatedRecords)
async def list_records(
    resource: str,
    page: Optional[int] = Query(None, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Page size, capped at 100"),
    sort: Optional[str] = Query(None, description="Field to sort by, defaults to createdAt"),
    order: Optional[str] = Query(None, description="asc or desc, defaults to desc"),
    project: ProjectOut = Depends(require_project_api_key),
):
    return await list_records_helper(project, resource, page, limit, sort, order)


@router.post("/{project_id}/{resource}", status_code=status.HTTP_201_CREATED)
async def create_record(
    resource: str,
    body: Dict[str, Any] = Body(...),
    project: ProjectOut = Depends(require_project_api_key),
):
    return await create_record_helper(project, resource, body)


@router.get("/{project_id}/{resource}/{record_id}")
async def get_record(resource: str, record_id: str, project: ProjectOut = Depends(require_project_api_key)):
    return await get_record_helper(project, resource, record_id)


@router.put("/{project_id}/{resource}/{record_id}")
async def replace_record(
    resource: str,
    record_id: str,
    body: Dict[str, Any] = Body(...),
    project: ProjectOut = Depends(require_project_api_key),
):
    return await replace_record_helper(project, resource, record_id, body)


@router.patch("/{project_id}/{resource}/{record_id}")
async def patch_record(
    resource: str,
    record_id: str,
    body: Dict[str, Any] = Body(...),
    project: ProjectOut = Depends(require_project_api_key),
):
    return await patch_record_helper(project, resource, record_id, body)


@router.delete("/{project_id}/{resource}/{record_id}", response_model=dict)
async def delete_record(resource: str, record_id: str, project: ProjectOut = Depends(require_project_api_key)):
    return await delete_record_helper(project, resource, record_id)
