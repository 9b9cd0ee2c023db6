from pydantic import BaseModel, EmailStr, Field, ConfigDict
from typing import Optional

# ---------- User Models ----------

class User(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    name: Optional[str] = None


class UserOut(BaseModel):
    id: str = Field(..., alias="_id")
    email: EmailStr
    name: Optional[str] = None
    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True)
