import pytest

from app.models.project.project import FieldSchema, FieldType
from app.services.resource_management.fixtures import build_fixture_records, generate_field_value, make_faker
from app.utils.error_utils import ValidationError


@pytest.fixture
def faker():
    return make_faker(seed=1234)


def test_values_follow_field_type(faker):
    assert isinstance(generate_field_value(FieldType.STRING, faker), str)
    number = generate_field_value(FieldType.NUMBER, faker)
    assert isinstance(number, int) and 1 <= number <= 1000
    assert isinstance(generate_field_value(FieldType.BOOLEAN, faker), bool)
    assert generate_field_value(FieldType.NULL, faker) is None


def test_every_type_is_handled(faker):
    for field_type in FieldType:
        generate_field_value(field_type, faker)


def test_records_match_schema(faker):
    fields = [
        FieldSchema(name="title", type=FieldType.STRING, required=True),
        FieldSchema(name="score", type=FieldType.NUMBER),
        FieldSchema(name="archived", type=FieldType.NULL),
        FieldSchema(name="ghost", type=FieldType.UNDEFINED),
    ]
    records = build_fixture_records(fields, 5, faker)
    assert len(records) == 5
    for record in records:
        assert set(record) == {"title", "score", "archived"}
        assert record["archived"] is None


def test_count_is_capped(faker):
    fields = [FieldSchema(name="title", type=FieldType.STRING)]
    assert len(build_fixture_records(fields, 1000, faker)) == 100


def test_no_fields_is_rejected(faker):
    with pytest.raises(ValidationError) as exc:
        build_fixture_records([], 5, faker)
    assert exc.value.detail == "No fields defined for this resource"
