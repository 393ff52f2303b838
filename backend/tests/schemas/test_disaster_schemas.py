"""Disaster schemas - required fields, numeric checks, type-list normalization."""

import pytest
from pydantic import ValidationError

from disaster_api.schemas.disaster import (
    DisasterCountReport, DisasterWrite, is_numeric,
)


def _payload(**overrides) -> dict:
    data = {
        "address": "1 Main St",
        "description": "flood",
        "city": "Springfield",
        "postal_code": "12345",
        "latitude": "1.0",
        "longitude": "2.0",
        "disaster_types": [1, 2],
    }
    data.update(overrides)
    return data


def test_valid_payload_parses():
    body = DisasterWrite(**_payload())
    assert body.disaster_types == [1, 2]
    assert body.scalar_fields() == {
        "address": "1 Main St",
        "description": "flood",
        "city": "Springfield",
        "postal_code": "12345",
        "latitude": "1.0",
        "longitude": "2.0",
    }


@pytest.mark.parametrize("field", [
    "address", "description", "city", "postal_code",
    "latitude", "longitude", "disaster_types",
])
def test_every_field_is_required(field):
    data = _payload()
    del data[field]
    with pytest.raises(ValidationError):
        DisasterWrite(**data)


def test_blank_text_rejected():
    with pytest.raises(ValidationError):
        DisasterWrite(**_payload(city="   "))


def test_text_is_stripped():
    assert DisasterWrite(**_payload(address="  2 Elm St ")).address == "2 Elm St"


def test_postal_code_accepts_number_and_stores_string():
    assert DisasterWrite(**_payload(postal_code=12345)).postal_code == "12345"


def test_postal_code_must_be_numeric():
    with pytest.raises(ValidationError):
        DisasterWrite(**_payload(postal_code="AB12"))


def test_latitude_must_be_a_string():
    with pytest.raises(ValidationError):
        DisasterWrite(**_payload(latitude=1.0))


def test_longitude_must_be_numeric():
    with pytest.raises(ValidationError):
        DisasterWrite(**_payload(longitude="east"))


def test_empty_type_list_rejected():
    with pytest.raises(ValidationError):
        DisasterWrite(**_payload(disaster_types=[]))


def test_type_list_error_names_offending_index():
    with pytest.raises(ValidationError) as exc_info:
        DisasterWrite(**_payload(disaster_types=[1, "abc"]))
    locs = [e["loc"] for e in exc_info.value.errors()]
    assert ("disaster_types", 1) in locs


def test_duplicate_type_ids_collapsed():
    assert DisasterWrite(**_payload(disaster_types=[2, 1, 2])).disaster_types == [2, 1]


@pytest.mark.parametrize("value, expected", [
    ("12345", True), ("-7.25", True), ("1e3", True), (".5", True),
    ("", False), ("1.2.3", False), ("abc", False), ("--1", False),
])
def test_is_numeric(value, expected):
    assert is_numeric(value) is expected


def test_count_report_parses_pairs():
    report = DisasterCountReport(disaster_types=[
        {"id": 5, "count": 3}, {"id": 7, "count": 9},
    ])
    assert report.as_pairs() == [(5, 3), (7, 9)]


def test_count_report_requires_entries():
    with pytest.raises(ValidationError):
        DisasterCountReport(disaster_types=[])


def test_count_report_rejects_negative_count():
    with pytest.raises(ValidationError):
        DisasterCountReport(disaster_types=[{"id": 5, "count": -1}])


def test_count_report_requires_count():
    with pytest.raises(ValidationError):
        DisasterCountReport(disaster_types=[{"id": 5}])


def test_type_id_beyond_int_column_rejected():
    with pytest.raises(ValidationError) as exc_info:
        DisasterWrite(**_payload(disaster_types=[1, 10**20]))
    locs = [e["loc"] for e in exc_info.value.errors()]
    assert ("disaster_types", 1) in locs


def test_type_id_at_int_column_limit_accepted():
    assert DisasterWrite(**_payload(disaster_types=[2**31 - 1])).disaster_types == [2**31 - 1]


@pytest.mark.parametrize("entry, field", [
    ({"id": 10**20, "count": 1}, "id"),
    ({"id": 5, "count": 10**20}, "count"),
    ({"id": 0, "count": 1}, "id"),
])
def test_count_report_bounds(entry, field):
    with pytest.raises(ValidationError) as exc_info:
        DisasterCountReport(disaster_types=[entry])
    locs = [e["loc"] for e in exc_info.value.errors()]
    assert ("disaster_types", 0, field) in locs
