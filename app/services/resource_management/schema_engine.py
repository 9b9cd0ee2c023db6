"""Schema-driven shaping of record payloads.

A resource's field list is the only gate on what gets stored: inbound
payloads are checked for required fields and filtered down to declared
keys, and stored records are flattened back into the API response shape.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Sequence

from app.models.project.project import FieldSchema
from app.utils.error_utils import ValidationError

RESERVED_FIELD_NAMES = frozenset({"id", "createdAt", "updatedAt"})


def missing_required_fields(fields: Sequence[FieldSchema], payload: Mapping[str, Any]) -> List[str]:
    """Names of required fields that are absent or null, in declaration order."""
    return [f.name for f in fields if f.required and payload.get(f.name) is None]


def check_required(fields: Sequence[FieldSchema], payload: Mapping[str, Any]) -> None:
    missing = missing_required_fields(fields, payload)
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def filter_payload(fields: Sequence[FieldSchema], payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Keep declared keys the payload actually carries.

    An explicit null is a value and is kept; undeclared keys are dropped.
    """
    return {f.name: payload[f.name] for f in fields if f.name in payload}


def shape_for_write(fields: Sequence[FieldSchema], payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Create and full replace: validate the raw payload, then filter it."""
    check_required(fields, payload)
    return filter_payload(fields, payload)


def merge_payload(
    fields: Sequence[FieldSchema],
    existing: Mapping[str, Any],
    patch: Mapping[str, Any],
) -> Dict[str, Any]:
    """Partial update.

    Declared keys present in ``patch`` overwrite ``existing``; everything else,
    including values for fields no longer in the schema, is carried over. The
    required check runs on the merged result.
    """
    merged = dict(existing)
    merged.update(filter_payload(fields, patch))
    check_required(fields, merged)
    return merged


def _as_utc(value: Any) -> Any:
    # stores opened without tz-aware codecs hand back naive UTC
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def project_record(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten a stored record into ``{id, ...data, createdAt, updatedAt}``."""
    return {
        "id": str(doc["_id"]),
        **(doc.get("data") or {}),
        "createdAt": _as_utc(doc.get("created_at")),
        "updatedAt": _as_utc(doc.get("updated_at")),
    }
