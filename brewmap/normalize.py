"""Turn raw tabular rows into canonical brewery records."""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Tuple

from .models import BreweryRecord

SOURCE_COLUMN = "source"

# CSV column -> record attribute
COLUMN_MAP: Dict[str, str] = {
    "id": "id",
    "name": "name",
    "brewery_type": "category",
    "address_1": "address_1",
    "city": "city",
    "state": "region",
    "postal_code": "postal_code",
    "country": "country",
    "phone": "phone",
    "website_url": "website_url",
    "source_state": "source_state",
    "source_state_code": "source_state_code",
}

REQUIRED_COLUMNS: Tuple[str, ...] = tuple(COLUMN_MAP) + ("latitude", "longitude")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def _coerce_text(value: Any) -> str:
    if _is_missing(value):
        return ""
    return str(value)


def _coerce_coordinate(value: Any) -> Any:
    # Unparsed on purpose: models.parse_coordinate decides renderability.
    return None if _is_missing(value) else value


def has_source_column(fields: Iterable[str]) -> bool:
    return SOURCE_COLUMN in set(fields or ())


def normalize_row(row: Mapping[str, Any], *, with_source: bool) -> BreweryRecord:
    values = {attr: _coerce_text(row.get(column)) for column, attr in COLUMN_MAP.items()}
    values["source"] = _coerce_text(row.get(SOURCE_COLUMN)) if with_source else ""
    return BreweryRecord(
        latitude=_coerce_coordinate(row.get("latitude")),
        longitude=_coerce_coordinate(row.get("longitude")),
        **values,
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]], fields: Iterable[str]
) -> Tuple[BreweryRecord, ...]:
    """Normalize ``rows`` for either the 14- or 15-column schema.

    ``fields`` are the header names the parser actually saw; the ``source``
    column is only read when it is among them.
    """

    with_source = has_source_column(fields)
    records = []
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        records.append(normalize_row(row, with_source=with_source))
    return tuple(records)
