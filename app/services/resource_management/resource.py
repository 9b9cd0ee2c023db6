from fastapi import HTTPException

from app.models.project.project import FieldSchema, FieldUpdate, ProjectOut, Resource, ResourceCreate
from app.services.project_management.project import get_owned_project, save_resources
from app.services.resource_management.schema_engine import RESERVED_FIELD_NAMES
from app.utils.error_utils import NotFoundError, ValidationError, InternalError
from app.utils.logger_utils import logger


def require_resource(project: ProjectOut, resource_name: str) -> Resource:
    resource = project.find_resource(resource_name)
    if resource is None:
        raise NotFoundError("Resource not found")
    return resource


def _check_field_name(name: str) -> None:
    if name in RESERVED_FIELD_NAMES:
        raise ValidationError(f"Field name '{name}' is reserved")


async def create_resource_helper(project_id: str, user: dict, payload: ResourceCreate) -> ProjectOut:
    project = await get_owned_project(project_id, user)
    name = payload.name.lower()
    if project.find_resource(name) is not None:
        logger.warning(f"Resource '{name}' already exists on project {project.id}")
        raise ValidationError("Resource already exists")
    try:
        updated = await save_resources(project, project.resources + [Resource(name=name, fields=[])])
        logger.info(f"Resource '{name}' created on project {project.id}")
        return updated
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"create_resource_helper error: {e}")
        raise InternalError()


async def add_field_helper(project_id: str, resource_name: str, user: dict, payload: FieldSchema) -> ProjectOut:
    project = await get_owned_project(project_id, user)
    resource = require_resource(project, resource_name)
    _check_field_name(payload.name)
    if payload.name in resource.field_names():
        raise ValidationError("Field already exists")

    resource.fields.append(FieldSchema(name=payload.name, type=payload.type, required=payload.required))
    try:
        return await save_resources(project, project.resources)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"add_field_helper error: {e}")
        raise InternalError()


async def update_field_helper(project_id: str, resource_name: str, user: dict, payload: FieldUpdate) -> ProjectOut:
    """Replace a field definition, optionally renaming it via ``originalName``.

    Stored records keep whatever they hold under the old name.
    """
    project = await get_owned_project(project_id, user)
    resource = require_resource(project, resource_name)
    original = payload.original_name or payload.name
    names = resource.field_names()
    if original not in names:
        raise NotFoundError("Field not found")
    _check_field_name(payload.name)
    if payload.name != original and payload.name in names:
        raise ValidationError("Field already exists")

    resource.fields[names.index(original)] = FieldSchema(name=payload.name, type=payload.type, required=payload.required)
    try:
        return await save_resources(project, project.resources)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"update_field_helper error: {e}")
        raise InternalError()


async def delete_field_helper(project_id: str, resource_name: str, field_name: str, user: dict) -> ProjectOut:
    project = await get_owned_project(project_id, user)
    resource = require_resource(project, resource_name)
    if field_name not in resource.field_names():
        raise NotFoundError("Field not found")

    resource.fields = [f for f in resource.fields if f.name != field_name]
    try:
        return await save_resources(project, project.resources)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"delete_field_helper error: {e}")
        raise InternalError()
