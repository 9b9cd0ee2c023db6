from fastapi import APIRouter, Depends, Response, status
from app.models.auth.auth import LoginPayload, RefreshPayload, TokenPair, AuthOut
from app.models.user.user import User, UserOut
from app.services.auth.auth import register_user, login_user, refresh_session
from app.services.auth.auth_utils import get_current_user, ACCESS_COOKIE, REFRESH_COOKIE
from config import JWT_CONFIG

router = APIRouter()


def _set_session_cookies(response: Response, token: TokenPair) -> None:
    response.set_cookie(
        key=ACCESS_COOKIE,
        value=token.access_token,
        httponly=True,
        secure=JWT_CONFIG["COOKIE_SECURE"],
        samesite="strict",
        max_age=JWT_CONFIG["ACCESS_TOKEN_EXPIRE_MINUTES"] * 60,
    )
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=token.refresh_token,
        httponly=True,
        secure=JWT_CONFIG["COOKIE_SECURE"],
        samesite="strict",
        max_age=JWT_CONFIG["REFRESH_TOKEN_EXPIRE_DAYS"] * 24 * 60 * 60,
    )


@router.post("/auth/register", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def register(payload: User, response: Response):
    result = await register_user(payload)
    _set_session_cookies(response, result.token)
    return result


@router.post("/auth/login", response_model=AuthOut)
async def login(payload: LoginPayload, response: Response):
    result = await login_user(payload.email, payload.password)
    _set_session_cookies(response, result.token)
    return result


@router.post("/auth/logout", response_model=dict)
async def logout(response: Response):
    response.delete_cookie(ACCESS_COOKIE)
    response.delete_cookie(REFRESH_COOKIE)
    return {"message": "Logged out"}


@router.post("/auth/refresh", response_model=TokenPair)
async def refresh(payload: RefreshPayload, response: Response):
    token = await refresh_session(payload.refresh_token)
    _set_session_cookies(response, token)
    return token


@router.get("/auth/me", response_model=UserOut)
async def me(user: dict = Depends(get_current_user)):
    return user
