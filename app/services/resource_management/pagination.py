import math
from dataclasses import dataclass
from typing import Optional

from app.utils.error_utils import ValidationError
from config import PAGINATION_CONFIG

# public sort names that live outside the data sub-document
_TOP_LEVEL_SORT_KEYS = {
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
    "id": "_id",
    "_id": "_id",
}


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int
    skip: int
    sort_key: str
    direction: int


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return PAGINATION_CONFIG["DEFAULT_LIMIT"]
    return max(1, min(limit, PAGINATION_CONFIG["MAX_LIMIT"]))


def sort_key_for(sort: Optional[str]) -> str:
    sort = sort or PAGINATION_CONFIG["DEFAULT_SORT"]
    if "$" in sort:
        raise ValidationError(f"Invalid sort field: {sort}")
    return _TOP_LEVEL_SORT_KEYS.get(sort, f"data.{sort}")


def resolve_page(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> PageWindow:
    """Turn raw query parameters into a skip/limit window.

    Out-of-range values are clamped rather than rejected.
    """
    page = max(1, page if page is not None else PAGINATION_CONFIG["DEFAULT_PAGE"])
    limit = clamp_limit(limit)
    order = order or PAGINATION_CONFIG["DEFAULT_ORDER"]
    return PageWindow(
        page=page,
        limit=limit,
        skip=(page - 1) * limit,
        sort_key=sort_key_for(sort),
        direction=1 if order == "asc" else -1,
    )


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)
