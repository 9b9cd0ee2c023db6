
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError

from app.database.conn import mongo_client, utc_now
from app.models.auth.auth import AuthOut, TokenPair
from app.models.user.user import User, UserOut
from app.services.auth.auth_utils import (
    hash_password, verify_password, create_access_token, create_refresh_token, verify_refresh_token, to_object_id,
)
from app.utils.error_utils import AuthError, ValidationError, InternalError
from app.utils.logger_utils import logger
from config import database_config


def _db():
    return mongo_client.database


def issue_tokens(user_id: str) -> TokenPair:
    access = create_access_token({"sub": user_id})
    refresh = create_refresh_token(user_id)
    return TokenPair(access_token=access, refresh_token=refresh)


async def register_user(payload: User) -> AuthOut:
    try:
        existing = await _db()[database_config["USER_COLLECTION"]].find_one({"email": payload.email})
        if existing:
            logger.warning(f"Registration rejected, email already used: {payload.email}")
            raise ValidationError("User already exists")

        doc = payload.model_dump()
        doc["password"] = hash_password(doc["password"])
        doc["created_at"] = utc_now()
        doc["updated_at"] = utc_now()
        res = await _db()[database_config["USER_COLLECTION"]].insert_one(doc)
        doc["_id"] = str(res.inserted_id)
        logger.info(f"User registered with ID: {doc['_id']}")
        return AuthOut(user=UserOut(**doc), token=issue_tokens(doc["_id"]))
    except DuplicateKeyError:
        raise ValidationError("User already exists")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"register_user error: {e}")
        raise InternalError()


async def login_user(email: str, password: str) -> AuthOut:
    try:
        user = await _db()[database_config["USER_COLLECTION"]].find_one({"email": email})
        if not user or not verify_password(password, user.get("password", "")):
            logger.warning(f"Failed login for {email}")
            raise AuthError("Invalid credentials")
        user["_id"] = str(user["_id"])
        return AuthOut(user=UserOut(**user), token=issue_tokens(user["_id"]))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"login_user error: {e}")
        raise InternalError()


async def refresh_session(refresh_token: str) -> TokenPair:
    data = verify_refresh_token(refresh_token)
    user_id = to_object_id(data.get("sub"))
    if user_id is None:
        raise AuthError("Invalid or expired refresh token")
    user = await _db()[database_config["USER_COLLECTION"]].find_one({"_id": user_id}, {"_id": 1})
    if not user:
        raise AuthError("Invalid or expired refresh token")
    return issue_tokens(str(user["_id"]))
