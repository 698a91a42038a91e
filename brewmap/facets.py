"""Option lists for the category, country and region selectors."""

from __future__ import annotations

from typing import Callable, Iterable, List

from .filters import ANY, fold
from .models import BreweryRecord

ANY_OPTION = "All"


def locale_sort_key(value: str):
    # Accent/case-insensitive primary order; ties put lower case first.
    return fold(value), value.swapcase()


def _distinct_sorted(
    records: Iterable[BreweryRecord],
    value_of: Callable[[BreweryRecord], str],
    keep: Callable[[BreweryRecord], bool] = lambda _record: True,
) -> List[str]:
    values = {value_of(record) for record in records if keep(record)}
    values.discard("")
    return sorted(values, key=locale_sort_key)


def category_options(records: Iterable[BreweryRecord]) -> List[str]:
    """Distinct non-empty categories across the whole loaded set."""

    return _distinct_sorted(records, lambda record: record.category)


def country_options(records: Iterable[BreweryRecord]) -> List[str]:
    return _distinct_sorted(records, lambda record: record.country)


def region_options(records: Iterable[BreweryRecord], country: str = ANY) -> List[str]:
    """Regions observed among records of ``country``, or all records for ``ANY``."""

    return _distinct_sorted(
        records,
        lambda record: record.region,
        lambda record: not country or record.country == country,
    )


def with_any_option(options: Iterable[str]) -> List[str]:
    return [ANY_OPTION, *options]


def option_value(selection: str) -> str:
    """Map a selector entry back to a filter value (``ANY`` for the "All" entry)."""

    return ANY if selection in ("", ANY_OPTION) else selection
