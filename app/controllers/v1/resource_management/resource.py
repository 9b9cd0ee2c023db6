from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.models.project.project import FieldSchema, FieldUpdate, GeneratePayload, ProjectOut, ResourceCreate
from app.models.record.record import GenerateOut, PaginatedRecords
from app.services.auth.auth_utils import get_current_user
from app.services.project_management.project import get_owned_project
from app.services.record.record import (
    delete_record_helper,
    generate_records_helper,
    list_raw_records_helper,
)
from app.services.resource_management.resource import (
    add_field_helper,
    create_resource_helper,
    delete_field_helper,
    update_field_helper,
)


router = APIRouter()

# ---------- RESOURCE & FIELD DEFINITIONS ----------

@router.post("/projects/{project_id}/resources", response_model=ProjectOut)
async def create_resource(project_id: str, payload: ResourceCreate, user: dict = Depends(get_current_user)):
    """Declare a resource; names are stored lowercase and must be unique."""
    return await create_resource_helper(project_id, user, payload)


@router.post("/projects/{project_id}/resources/{resource}/fields", response_model=ProjectOut)
async def add_field(project_id: str, resource: str, payload: FieldSchema, user: dict = Depends(get_current_user)):
    return await add_field_helper(project_id, resource, user, payload)


@router.put("/projects/{project_id}/resources/{resource}/fields", response_model=ProjectOut)
async def update_field(project_id: str, resource: str, payload: FieldUpdate, user: dict = Depends(get_current_user)):
    return await update_field_helper(project_id, resource, user, payload)


@router.delete("/projects/{project_id}/resources/{resource}/fields/{field_name}", response_model=ProjectOut)
async def delete_field(project_id: str, resource: str, field_name: str, user: dict = Depends(get_current_user)):
    return await delete_field_helper(project_id, resource, field_name, user)

# ---------- STORED DATA ----------

@router.post("/projects/{project_id}/resources/{resource}/generate", response_model=GenerateOut)
async def generate_data(project_id: str, resource: str, payload: GeneratePayload, user: dict = Depends(get_current_user)):
    """Insert up to 100 fake records matching the resource's fields."""
    project = await get_owned_project(project_id, user)
    return await generate_records_helper(project, resource, payload.count)


@router.get("/projects/{project_id}/resources/{resource}/data", response_model=PaginatedRecords)
async def list_data(
    project_id: str,
    resource: str,
    page: Optional[int] = Query(None, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Page size, capped at 100"),
    user: dict = Depends(get_current_user),
):
    project = await get_owned_project(project_id, user)
    return await list_raw_records_helper(project, resource, page, limit)


@router.delete("/projects/{project_id}/resources/{resource}/data/{record_id}", response_model=dict)
async def delete_data(project_id: str, resource: str, record_id: str, user: dict = Depends(get_current_user)):
    project = await get_owned_project(project_id, user)
    return await delete_record_helper(project, resource, record_id)
