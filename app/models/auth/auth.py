from pydantic import BaseModel, EmailStr

from app.models.user.user import UserOut

# ---------- Auth Schemas ----------#

class LoginPayload(BaseModel):
    email: EmailStr
    password: str

class RefreshPayload(BaseModel):
    refresh_token: str

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"

class AuthOut(BaseModel):
    user: UserOut
    token: TokenPair
