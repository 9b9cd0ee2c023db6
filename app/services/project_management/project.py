from app.database.conn import mongo_client, utc_now
from app.utils.logger_utils import logger
from app.models.project.project import Project, ProjectOut, Resource
from app.services.auth.auth_utils import generate_api_key, to_object_id
from app.utils.error_utils import NotFoundError, InternalError
from fastapi import HTTPException
from config import database_config
from typing import List


def _db():
    return mongo_client.database


def _to_out(doc: dict) -> ProjectOut:
    doc["_id"] = str(doc["_id"])
    return ProjectOut(**doc)


async def create_project_helper(user: dict, payload: Project) -> ProjectOut:
    try:
        doc = payload.model_dump()
        doc["description"] = doc.get("description") or ""
        doc["user_id"] = user["_id"]
        doc["api_key"] = generate_api_key()
        doc["resources"] = []
        doc["created_at"] = utc_now()
        doc["updated_at"] = utc_now()
        result = await _db()[database_config["PROJECT_COLLECTION"]].insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Project {result.inserted_id} created for user {user['_id']}")
        return _to_out(doc)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"create_project_helper error: {e}")
        raise InternalError()


async def get_projects_helper(user: dict) -> List[ProjectOut]:
    try:
        cursor = _db()[database_config["PROJECT_COLLECTION"]].find({"user_id": user["_id"]}, sort=[("created_at", -1)])
        items: list[ProjectOut] = []
        async for doc in cursor:
            items.append(_to_out(doc))
        return items
    except Exception as e:
        logger.error(f"get_projects_helper error: {e}")
        raise InternalError()


async def get_owned_project(project_id: str, user: dict) -> ProjectOut:
    """Load a project only if ``user`` owns it; anything else is a 404."""
    oid = to_object_id(project_id)
    if oid is None:
        raise NotFoundError("Project not found")
    try:
        doc = await _db()[database_config["PROJECT_COLLECTION"]].find_one({"_id": oid, "user_id": user["_id"]})
    except Exception as e:
        logger.error(f"get_owned_project error: {e}")
        raise InternalError()
    if not doc:
        raise NotFoundError("Project not found")
    return _to_out(doc)


async def save_resources(project: ProjectOut, resources: List[Resource]) -> ProjectOut:
    """Write back the whole embedded resource list. Last write wins."""
    now = utc_now()
    res = await _db()[database_config["PROJECT_COLLECTION"]].update_one(
        {"_id": to_object_id(project.id), "user_id": project.user_id},
        {"$set": {"resources": [r.model_dump(mode="json") for r in resources], "updated_at": now}},
    )
    if res.matched_count == 0:
        raise NotFoundError("Project not found")
    return project.model_copy(update={"resources": resources, "updated_at": now})


async def delete_project_helper(project_id: str, user: dict) -> dict:
    project = await get_owned_project(project_id, user)
    try:
        res = await _db()[database_config["PROJECT_COLLECTION"]].delete_one(
            {"_id": to_object_id(project.id), "user_id": user["_id"]}
        )
        if res.deleted_count == 0:
            raise NotFoundError("Project not found")
        records = await _db()[database_config["RECORD_COLLECTION"]].delete_many({"project_id": project.id})
        logger.info(f"Project {project.id} deleted along with {records.deleted_count} records")
        return {"message": "Project deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"delete_project_helper error: {e}")
        raise InternalError()
