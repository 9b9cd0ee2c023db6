from fastapi import APIRouter, Depends
from typing import List

from app.models.project.project import Project, ProjectOut
from app.services.auth.auth_utils import get_current_user
from app.services.project_management.project import (
    create_project_helper,
    get_projects_helper,
    get_owned_project,
    delete_project_helper,
)


router = APIRouter()


@router.get("/projects", response_model=List[ProjectOut])
async def list_projects(user: dict = Depends(get_current_user)):
    """Projects owned by the session user, newest first."""
    return await get_projects_helper(user)


@router.post("/projects", response_model=ProjectOut)
async def create_project(payload: Project, user: dict = Depends(get_current_user)):
    return await create_project_helper(user, payload)


@router.get("/projects/{project_id}", response_model=ProjectOut)
async def get_project(project_id: str, user: dict = Depends(get_current_user)):
    return await get_owned_project(project_id, user)


@router.delete("/projects/{project_id}", response_model=dict)
async def delete_project(project_id: str, user: dict = Depends(get_current_user)):
    return await delete_project_helper(project_id, user)
