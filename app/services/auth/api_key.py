from typing import Optional

from fastapi import Header

from app.database.conn import mongo_client
from app.models.project.project import ProjectOut
from app.services.auth.auth_utils import to_object_id
from app.utils.error_utils import AuthError
from config import database_config


async def require_project_api_key(
    project_id: str,
    x_api_key: Optional[str] = Header(None, alias="x-api-key"),
) -> ProjectOut:
    """Resolve ``x-api-key`` to the project named in the path.

    The key alone is not enough: id and key must belong to the same project.
    No user ownership is consulted here.
    """
    if not x_api_key:
        raise AuthError("API key is required")

    oid = to_object_id(project_id)
    if oid is None:
        raise AuthError("Invalid API key")

    doc = await mongo_client.database[database_config["PROJECT_COLLECTION"]].find_one(
        {"_id": oid, "api_key": x_api_key}
    )
    if not doc:
        raise AuthError("Invalid API key")
    doc["_id"] = str(doc["_id"])
    return ProjectOut(**doc)
