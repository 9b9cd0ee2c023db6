from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List

# ---------- Record Models ----------#

class PaginatedRecords(BaseModel):
    data: List[Dict[str, Any]]
    total: int
    page: int
    limit: int
    total_pages: int = Field(..., alias="totalPages")
    model_config = ConfigDict(populate_by_name=True)


class GenerateOut(BaseModel):
    message: str
    count: int
