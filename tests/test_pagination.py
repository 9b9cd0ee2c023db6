import pytest

from app.services.resource_management.pagination import resolve_page, sort_key_for, total_pages
from app.utils.error_utils import ValidationError


def test_defaults():
    window = resolve_page()
    assert (window.page, window.limit, window.skip) == (1, 10, 0)
    assert window.sort_key == "created_at"
    assert window.direction == -1


def test_skip_is_offset_of_previous_pages():
    assert resolve_page(page=3, limit=20).skip == 40


def test_limit_is_clamped_to_100():
    assert resolve_page(limit=500).limit == 100


def test_non_positive_values_are_clamped():
    window = resolve_page(page=0, limit=0)
    assert (window.page, window.limit, window.skip) == (1, 1, 0)


def test_order():
    assert resolve_page(order="asc").direction == 1
    assert resolve_page(order="sideways").direction == -1


def test_sort_keys():
    assert sort_key_for("updatedAt") == "updated_at"
    assert sort_key_for("id") == "_id"
    assert sort_key_for("title") == "data.title"


def test_total_pages():
    assert total_pages(25, 10) == 3
    assert total_pages(20, 10) == 2
    assert total_pages(0, 10) == 0
    assert total_pages(1, 100) == 1


def test_operator_sort_names_are_rejected():
    with pytest.raises(ValidationError):
        resolve_page(sort="$natural")
    with pytest.raises(ValidationError):
        sort_key_for("data.$x")
