"""Filter engine for the canonical brewery record set."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Tuple

from .models import BreweryRecord

ANY = ""

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")


def fold(value: object) -> str:
    """Accent- and case-insensitive key: NFD, drop combining marks, lower."""

    if value is None:
        return ""
    decomposed = unicodedata.normalize("NFD", str(value))
    return _COMBINING_MARKS.sub("", decomposed).lower()


@dataclass(frozen=True)
class FilterCriteria:
    """Four independent predicates; ``ANY`` disables one."""

    category: str = ANY
    country: str = ANY
    region: str = ANY
    query: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.category or self.country or self.region or fold(self.query))


def search_key(record: BreweryRecord) -> str:
    return " ".join(fold(part) for part in (record.name, record.city, record.postal_code))


def matches(record: BreweryRecord, criteria: FilterCriteria, folded_query: str | None = None) -> bool:
    if criteria.category and record.category != criteria.category:
        return False
    if criteria.country and record.country != criteria.country:
        return False
    # Not validated against the country: a stale region simply matches nothing.
    if criteria.region and record.region != criteria.region:
        return False
    query = fold(criteria.query) if folded_query is None else folded_query
    if query and query not in search_key(record):
        return False
    return True


def apply_filters(
    records: Iterable[BreweryRecord], criteria: FilterCriteria
) -> Tuple[BreweryRecord, ...]:
    """Return the records passing every active predicate, in their original order."""

    folded_query = fold(criteria.query)
    return tuple(record for record in records if matches(record, criteria, folded_query))


def renderable(records: Iterable[BreweryRecord]) -> Tuple[BreweryRecord, ...]:
    return tuple(record for record in records if record.is_renderable)
