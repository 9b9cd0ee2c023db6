from typing import Any, Dict, Optional

from fastapi import HTTPException
from pymongo import ReturnDocument

from app.database.conn import mongo_client, utc_now
from app.models.project.project import ProjectOut, Resource
from app.models.record.record import GenerateOut, PaginatedRecords
from app.services.auth.auth_utils import to_object_id
from app.services.resource_management.fixtures import build_fixture_records
from app.services.resource_management.pagination import PageWindow, resolve_page, total_pages
from app.services.resource_management.resource import require_resource
from app.services.resource_management.schema_engine import merge_payload, project_record, shape_for_write
from app.utils.error_utils import InternalError, NotFoundError
from app.utils.logger_utils import logger
from config import database_config


def _records():
    return mongo_client.database[database_config["RECORD_COLLECTION"]]


def _scope(project: ProjectOut, resource: Resource) -> Dict[str, Any]:
    return {"project_id": project.id, "resource_name": resource.name}


def _record_filter(project: ProjectOut, resource: Resource, record_id: str) -> Dict[str, Any]:
    oid = to_object_id(record_id)
    if oid is None:
        raise NotFoundError("Record not found")
    return {"_id": oid, **_scope(project, resource)}


def serialize_raw_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    doc["_id"] = str(doc["_id"])
    return doc


async def _fetch_page(query: Dict[str, Any], window: PageWindow, serialize) -> PaginatedRecords:
    total = await _records().count_documents(query)
    data = []
    # pages past the end never reach the server; skip may exceed int64
    if window.skip < total:
        cursor = _records().find(
            query, sort=[(window.sort_key, window.direction)], skip=window.skip, limit=window.limit
        )
        async for doc in cursor:
            data.append(serialize(doc))
    return PaginatedRecords(
        data=data,
        total=total,
        page=window.page,
        limit=window.limit,
        total_pages=total_pages(total, window.limit),
    )


# ---------- Public data API (API key) ----------#

async def list_records_helper(
    project: ProjectOut,
    resource_name: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> PaginatedRecords:
    resource = require_resource(project, resource_name)
    window = resolve_page(page, limit, sort, order)
    try:
        return await _fetch_page(_scope(project, resource), window, project_record)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"list_records_helper error: {e}")
        raise InternalError()


async def create_record_helper(project: ProjectOut, resource_name: str, body: Dict[str, Any]) -> Dict[str, Any]:
    resource = require_resource(project, resource_name)
    data = shape_for_write(resource.fields, body)
    try:
        now = utc_now()
        doc = {**_scope(project, resource), "data": data, "created_at": now, "updated_at": now}
        result = await _records().insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Record {result.inserted_id} created in {project.id}/{resource.name}")
        return project_record(doc)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"create_record_helper error: {e}")
        raise InternalError()


async def get_record_helper(project: ProjectOut, resource_name: str, record_id: str) -> Dict[str, Any]:
    resource = require_resource(project, resource_name)
    query = _record_filter(project, resource, record_id)
    try:
        doc = await _records().find_one(query)
    except Exception as e:
        logger.error(f"get_record_helper error: {e}")
        raise InternalError()
    if not doc:
        raise NotFoundError("Record not found")
    return project_record(doc)


async def _write_data(query: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    doc = await _records().find_one_and_update(
        query,
        {"$set": {"data": data, "updated_at": utc_now()}},
        return_document=ReturnDocument.AFTER,
    )
    if not doc:
        raise NotFoundError("Record not found")
    return project_record(doc)


async def replace_record_helper(
    project: ProjectOut, resource_name: str, record_id: str, body: Dict[str, Any]
) -> Dict[str, Any]:
    resource = require_resource(project, resource_name)
    query = _record_filter(project, resource, record_id)
    data = shape_for_write(resource.fields, body)
    try:
        return await _write_data(query, data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"replace_record_helper error: {e}")
        raise InternalError()


async def patch_record_helper(
    project: ProjectOut, resource_name: str, record_id: str, body: Dict[str, Any]
) -> Dict[str, Any]:
    resource = require_resource(project, resource_name)
    query = _record_filter(project, resource, record_id)
    try:
        current = await _records().find_one(query)
    except Exception as e:
        logger.error(f"patch_record_helper error: {e}")
        raise InternalError()
    if not current:
        raise NotFoundError("Record not found")

    data = merge_payload(resource.fields, current.get("data") or {}, body)
    try:
        return await _write_data(query, data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"patch_record_helper error: {e}")
        raise InternalError()


async def delete_record_helper(project: ProjectOut, resource_name: str, record_id: str) -> dict:
    resource = require_resource(project, resource_name)
    query = _record_filter(project, resource, record_id)
    try:
        res = await _records().delete_one(query)
    except Exception as e:
        logger.error(f"delete_record_helper error: {e}")
        raise InternalError()
    if res.deleted_count == 0:
        raise NotFoundError("Record not found")
    return {"message": "Record deleted successfully"}


# ---------- Owner management API (session) ----------#

async def list_raw_records_helper(
    project: ProjectOut,
    resource_name: str,
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> PaginatedRecords:
    """Newest first, stored shape, no projection."""
    resource = require_resource(project, resource_name)
    window = resolve_page(page, limit)
    try:
        return await _fetch_page(_scope(project, resource), window, serialize_raw_record)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"list_raw_records_helper error: {e}")
        raise InternalError()


async def generate_records_helper(project: ProjectOut, resource_name: str, count: int) -> GenerateOut:
    resource = require_resource(project, resource_name)
    payloads = build_fixture_records(resource.fields, count)
    try:
        now = utc_now()
        docs = [
            {**_scope(project, resource), "data": data, "created_at": now, "updated_at": now}
            for data in payloads
        ]
        if docs:
            await _records().insert_many(docs)
        logger.info(f"Generated {len(docs)} records in {project.id}/{resource.name} (requested {count})")
        return GenerateOut(message=f"Generated {len(docs)} records", count=len(docs))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"generate_records_helper error: {e}")
        raise InternalError()
