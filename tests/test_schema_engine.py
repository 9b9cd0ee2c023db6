import pytest

from app.models.project.project import FieldSchema, FieldType
from app.services.resource_management.schema_engine import (
    check_required,
    filter_payload,
    merge_payload,
    missing_required_fields,
    project_record,
    shape_for_write,
)
from app.utils.error_utils import ValidationError


@pytest.fixture
def fields():
    return [
        FieldSchema(name="title", type=FieldType.STRING, required=True),
        FieldSchema(name="priority", type=FieldType.NUMBER, required=True),
        FieldSchema(name="done", type=FieldType.BOOLEAN),
    ]


# --- required fields ---

def test_missing_required_lists_every_field(fields):
    assert missing_required_fields(fields, {"done": True}) == ["title", "priority"]


def test_null_counts_as_missing(fields):
    assert missing_required_fields(fields, {"title": None, "priority": 1}) == ["title"]


def test_falsy_values_satisfy_required(fields):
    assert missing_required_fields(fields, {"title": "", "priority": 0}) == []


def test_check_required_joins_names_in_message(fields):
    with pytest.raises(ValidationError) as exc:
        check_required(fields, {})
    assert exc.value.status_code == 400
    assert exc.value.detail == "Missing required fields: title, priority"


# --- filtering ---

def test_filter_drops_undeclared_keys(fields):
    assert filter_payload(fields, {"title": "x", "extra": "y", "priority": 2}) == {"title": "x", "priority": 2}


def test_filter_omits_absent_keys_without_defaults(fields):
    assert filter_payload(fields, {"title": "x"}) == {"title": "x"}


def test_filter_keeps_explicit_null_for_optional_field(fields):
    assert filter_payload(fields, {"done": None}) == {"done": None}


def test_shape_for_write_validates_before_filtering(fields):
    with pytest.raises(ValidationError):
        shape_for_write(fields, {"title": "x", "extra": 1})
    assert shape_for_write(fields, {"title": "x", "priority": 3, "extra": 1}) == {"title": "x", "priority": 3}


# --- partial updates ---

def test_merge_overwrites_only_patched_fields():
    fields = [FieldSchema(name="a", type=FieldType.NUMBER), FieldSchema(name="b", type=FieldType.NUMBER)]
    assert merge_payload(fields, {"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}


def test_merge_with_empty_patch_is_unchanged():
    fields = [FieldSchema(name="a", type=FieldType.NUMBER), FieldSchema(name="b", type=FieldType.NUMBER)]
    assert merge_payload(fields, {"a": 1, "b": 2}, {}) == {"a": 1, "b": 2}


def test_merge_keeps_values_of_removed_fields():
    fields = [FieldSchema(name="a", type=FieldType.NUMBER)]
    assert merge_payload(fields, {"a": 1, "legacy": "kept"}, {"a": 5, "legacy": "ignored"}) == {
        "a": 5,
        "legacy": "kept",
    }


def test_merge_rejects_result_missing_required_field(fields):
    # stored record predates the required priority field
    with pytest.raises(ValidationError) as exc:
        merge_payload(fields, {"title": "x"}, {"done": True})
    assert "priority" in exc.value.detail


def test_merge_rejects_nulling_required_field(fields):
    with pytest.raises(ValidationError):
        merge_payload(fields, {"title": "x", "priority": 1}, {"title": None})


# --- projection ---

def test_project_record_flattens_data():
    doc = {
        "_id": "abc",
        "project_id": "p",
        "resource_name": "todos",
        "data": {"title": "x", "dropped_field": 1},
        "created_at": "c",
        "updated_at": "u",
    }
    assert project_record(doc) == {"id": "abc", "title": "x", "dropped_field": 1, "createdAt": "c", "updatedAt": "u"}
