from __future__ import annotations

import math

from brewmap.normalize import REQUIRED_COLUMNS, normalize_rows

FIELDS_14 = list(REQUIRED_COLUMNS)
FIELDS_15 = FIELDS_14 + ["source"]


def _row(**overrides):
    row = {column: "" for column in FIELDS_15}
    row.update(
        id="abc", name="Surly Brewing Co", brewery_type="regional", city="Minneapolis",
        state="Minnesota", postal_code="55414", country="United States",
        latitude="44.97", longitude="-93.21", source="openbrewerydb",
    )
    row.update(overrides)
    return row


def test_fifteen_column_schema_keeps_source():
    (record,) = normalize_rows([_row()], FIELDS_15)
    assert record.source == "openbrewerydb"
    assert record.category == "regional"
    assert record.region == "Minnesota"


def test_fourteen_column_schema_defaults_source():
    row = _row()
    row.pop("source")
    (record,) = normalize_rows([row], FIELDS_14)
    assert record.source == ""


def test_source_ignored_when_header_lacks_it():
    (record,) = normalize_rows([_row(source="stray")], FIELDS_14)
    assert record.source == ""


def test_missing_and_null_fields_become_empty_strings():
    rows = [{"id": None, "name": math.nan, "latitude": "1", "longitude": "2"}]
    (record,) = normalize_rows(rows, ["id", "name", "latitude", "longitude"])
    assert record.id == ""
    assert record.name == ""
    assert record.phone == ""
    assert record.website_url == ""
    assert record.source_state_code == ""


def test_coordinates_are_not_defaulted_to_zero():
    (record,) = normalize_rows([{"name": "No coords", "latitude": None}], FIELDS_14)
    assert record.latitude is None
    assert record.longitude is None
    assert record.is_renderable is False


def test_unparseable_coordinates_are_kept():
    records = normalize_rows([_row(latitude="bad"), _row(id="two")], FIELDS_15)
    assert len(records) == 2
    assert records[0].latitude == "bad"
    assert records[0].is_renderable is False
    assert records[1].is_renderable is True


def test_non_mapping_rows_are_skipped():
    records = normalize_rows([_row(), None, ["not", "a", "row"]], FIELDS_15)
    assert len(records) == 1


def test_numeric_values_are_stringified():
    (record,) = normalize_rows([_row(postal_code=55414, phone=6125551234)], FIELDS_15)
    assert record.postal_code == "55414"
    assert record.phone == "6125551234"
