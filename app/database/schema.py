from typing import Any, Dict

from app.database.conn import mongo_client
from app.models.project.project import FieldType
from app.utils.logger_utils import logger
from config import database_config


def _user_validator() -> Dict[str, Any]:
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["email", "password", "created_at", "updated_at"],
            "properties": {
                "email": {"bsonType": "string"},
                "password": {"bsonType": "string"},
                "name": {"bsonType": ["string", "null"]},
                "created_at": {"bsonType": "date"},
                "updated_at": {"bsonType": "date"},
            },
        }
    }


def _project_validator() -> Dict[str, Any]:
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["name", "user_id", "api_key", "resources", "created_at", "updated_at"],
            "properties": {
                "name": {"bsonType": "string"},
                "description": {"bsonType": ["string", "null"]},
                "user_id": {"bsonType": "string"},
                "api_key": {"bsonType": "string"},
                "resources": {
                    "bsonType": "array",
                    "items": {
                        "bsonType": "object",
                        "required": ["name", "fields"],
                        "properties": {
                            "name": {"bsonType": "string"},
                            "fields": {
                                "bsonType": "array",
                                "items": {
                                    "bsonType": "object",
                                    "required": ["name", "type", "required"],
                                    "properties": {
                                        "name": {"bsonType": "string"},
                                        "type": {"enum": [t.value for t in FieldType]},
                                        "required": {"bsonType": "bool"},
                                    },
                                },
                            },
                        },
                    },
                },
                "created_at": {"bsonType": "date"},
                "updated_at": {"bsonType": "date"},
            },
        }
    }


def _record_validator() -> Dict[str, Any]:
    # data is schema-on-read; only the scoping keys are enforced here
    return {
        "$jsonSchema": {
            "bsonType": "object",
            "required": ["project_id", "resource_name", "data", "created_at", "updated_at"],
            "properties": {
                "project_id": {"bsonType": "string"},
                "resource_name": {"bsonType": "string"},
                "data": {"bsonType": "object"},
                "created_at": {"bsonType": "date"},
                "updated_at": {"bsonType": "date"},
            },
        }
    }


async def ensure_collections_and_indexes() -> None:
    """Create collections with validators and ensure indexes exist.

    This is idempotent and safe to call on every startup.
    """
    db = mongo_client.database

    collections: Dict[str, Dict[str, Any]] = {
        database_config["USER_COLLECTION"]: _user_validator(),
        database_config["PROJECT_COLLECTION"]: _project_validator(),
        database_config["RECORD_COLLECTION"]: _record_validator(),
    }

    existing = await db.list_collection_names()

    for name, validator in collections.items():
        try:
            if name not in existing:
                await db.create_collection(name, validator=validator)
                logger.info(f"Created collection {name} with validator")
            else:
                try:
                    await db.command({
                        "collMod": name,
                        "validator": validator,
                        "validationLevel": "moderate",
                    })
                    logger.info(f"Updated validator for collection {name}")
                except Exception as e:
                    logger.warning(f"Could not update validator for {name}: {e}")
        except Exception as e:
            logger.error(f"Error ensuring collection {name}: {e}")

    try:
        await db[database_config["USER_COLLECTION"]].create_index("email", unique=True, name="uniq_user_email")
    except Exception as e:
        logger.warning(f"Create index users.email failed or exists: {e}")

    try:
        await db[database_config["PROJECT_COLLECTION"]].create_index("api_key", unique=True, name="uniq_project_api_key")
    except Exception as e:
        logger.warning(f"Create index projects.api_key failed or exists: {e}")

    try:
        await db[database_config["PROJECT_COLLECTION"]].create_index(
            [("user_id", 1), ("created_at", -1)], unique=False, name="idx_project_user_created"
        )
    except Exception as e:
        logger.warning(f"Create index projects (user_id,created_at) failed or exists: {e}")

    try:
        await db[database_config["RECORD_COLLECTION"]].create_index(
            [("project_id", 1), ("resource_name", 1)], unique=False, name="idx_record_project_resource"
        )
    except Exception as e:
        logger.warning(f"Create index resource_data (project_id,resource_name) failed or exists: {e}")
