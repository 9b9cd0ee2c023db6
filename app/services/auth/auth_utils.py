import secrets
import bcrypt
from datetime import datetime, timedelta, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from app.database.conn import mongo_client
from app.utils.error_utils import AuthError
from config import JWT_CONFIG, API_KEY_CONFIG, database_config

ACCESS_COOKIE = "access_token"
REFRESH_COOKIE = "refresh_token"


# --------------------------------------------------------------------
# Password hashing
# --------------------------------------------------------------------
def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    if not hashed_password:
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


# --------------------------------------------------------------------
# API keys
# --------------------------------------------------------------------
def generate_api_key() -> str:
    return API_KEY_CONFIG["PREFIX"] + secrets.token_hex(API_KEY_CONFIG["TOKEN_BYTES"])


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a path id, returning None for anything that is not an ObjectId."""
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except InvalidId:
        return None


# --------------------------------------------------------------------
# JWT token creation
# --------------------------------------------------------------------
def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=JWT_CONFIG["ACCESS_TOKEN_EXPIRE_MINUTES"]))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, JWT_CONFIG["JWT_SECRET_KEY"], algorithm=JWT_CONFIG["JWT_ALGORITHM"])


def create_refresh_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create a long-lived JWT refresh token."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=JWT_CONFIG["REFRESH_TOKEN_EXPIRE_DAYS"]))
    to_encode = {"sub": user_id, "exp": expire}
    return jwt.encode(to_encode, JWT_CONFIG["JWT_REFRESH_SECRET_KEY"], algorithm=JWT_CONFIG["JWT_ALGORITHM"])


# --------------------------------------------------------------------
# Token verification
# --------------------------------------------------------------------
def verify_access_token(token: str) -> dict:
    """Verify and decode an access token."""
    try:
        return jwt.decode(token, JWT_CONFIG["JWT_SECRET_KEY"], algorithms=[JWT_CONFIG["JWT_ALGORITHM"]])
    except JWTError:
        raise AuthError("Invalid or expired access token")


def verify_refresh_token(token: str) -> dict:
    """Verify and decode a refresh token."""
    try:
        return jwt.decode(token, JWT_CONFIG["JWT_REFRESH_SECRET_KEY"], algorithms=[JWT_CONFIG["JWT_ALGORITHM"]])
    except JWTError:
        raise AuthError("Invalid or expired refresh token")


security_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> dict:
    """Resolve the session credential (bearer header, else cookie) to a user document."""
    token = credentials.credentials if credentials else request.cookies.get(ACCESS_COOKIE)
    if not token:
        raise AuthError("Unauthorized")

    payload = verify_access_token(token)
    user_id = to_object_id(payload.get("sub"))
    if user_id is None:
        raise AuthError("Unauthorized")

    user = await mongo_client.database[database_config["USER_COLLECTION"]].find_one({"_id": user_id}, {"password": 0})
    if not user:
        raise AuthError("Unauthorized")
    user["_id"] = str(user["_id"])
    return user
