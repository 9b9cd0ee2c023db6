from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

from config import FIXTURE_CONFIG

# ---------- Schema Models ----------#

class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"


class FieldSchema(BaseModel):
    name: str = Field(..., min_length=1)
    type: FieldType
    required: bool = False
    model_config = ConfigDict(str_strip_whitespace=True)


class FieldUpdate(FieldSchema):
    original_name: Optional[str] = Field(None, alias="originalName")
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)


class Resource(BaseModel):
    name: str
    fields: List[FieldSchema] = []

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]


class ResourceCreate(BaseModel):
    # names end up in URL paths
    name: str = Field(..., min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")
    model_config = ConfigDict(str_strip_whitespace=True)


class GeneratePayload(BaseModel):
    count: int = Field(FIXTURE_CONFIG["DEFAULT_COUNT"], ge=1)

# ---------- Project Models ----------#

class Project(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""


class ProjectOut(BaseModel):
    id: str = Field(..., alias="_id")
    name: str
    description: Optional[str] = ""
    user_id: str
    api_key: str
    resources: List[Resource] = []
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(protected_namespaces=(), populate_by_name=True)

    def find_resource(self, name: str) -> Optional[Resource]:
        wanted = name.lower()
        return next((r for r in self.resources if r.name == wanted), None)
