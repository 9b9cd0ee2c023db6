from typing import Any, Dict, List, Optional, Sequence

from faker import Faker

from app.models.project.project import FieldSchema, FieldType
from app.utils.error_utils import ValidationError
from config import FIXTURE_CONFIG

# sentinel for values that must not appear in the generated record at all
OMIT = object()


def make_faker(seed: Optional[int] = FIXTURE_CONFIG["FAKER_SEED"]) -> Faker:
    faker = Faker()
    if seed is not None:
        faker.seed_instance(seed)
    return faker


def generate_field_value(field_type: FieldType, faker: Faker) -> Any:
    if field_type == FieldType.STRING:
        return " ".join(faker.words(nb=FIXTURE_CONFIG["STRING_WORDS"]))
    if field_type == FieldType.NUMBER:
        return faker.random_int(min=FIXTURE_CONFIG["NUMBER_MIN"], max=FIXTURE_CONFIG["NUMBER_MAX"])
    if field_type == FieldType.BOOLEAN:
        return faker.pybool()
    if field_type == FieldType.NULL:
        return None
    if field_type == FieldType.UNDEFINED:
        return OMIT
    raise ValueError(f"Unknown field type: {field_type!r}")


def clamp_count(count: int) -> int:
    return max(0, min(count, FIXTURE_CONFIG["MAX_COUNT"]))


def build_fixture_records(
    fields: Sequence[FieldSchema],
    count: int,
    faker: Optional[Faker] = None,
) -> List[Dict[str, Any]]:
    """Build up to ``MAX_COUNT`` data payloads matching ``fields``."""
    if not fields:
        raise ValidationError("No fields defined for this resource")

    faker = faker or make_faker()
    records = []
    for _ in range(clamp_count(count)):
        data = {}
        for field in fields:
            value = generate_field_value(field.type, faker)
            if value is not OMIT:
                data[field.name] = value
        records.append(data)
    return records
