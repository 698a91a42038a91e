"""Session state for one loaded dataset and the pure functions that update it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .facets import category_options, country_options, region_options
from .filters import FilterCriteria, apply_filters, renderable
from .models import BreweryRecord


@dataclass(frozen=True)
class SessionState:
    records: Tuple[BreweryRecord, ...] = ()
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    category_options: Tuple[str, ...] = ()
    country_options: Tuple[str, ...] = ()
    region_options: Tuple[str, ...] = ()
    active: Tuple[BreweryRecord, ...] = ()
    load_error: Optional[str] = None

    @property
    def result_count(self) -> int:
        return len(self.active)

    @property
    def renderable(self) -> Tuple[BreweryRecord, ...]:
        return renderable(self.active)

    @property
    def count_label(self) -> str:
        return format_count(self.result_count)


def format_count(count: int) -> str:
    return f"{count:,}"


def loaded(records: Tuple[BreweryRecord, ...]) -> SessionState:
    """State right after a successful load: no filters, every record active."""

    records = tuple(records)
    criteria = FilterCriteria()
    return SessionState(
        records=records,
        criteria=criteria,
        category_options=tuple(category_options(records)),
        country_options=tuple(country_options(records)),
        region_options=tuple(region_options(records)),
        active=apply_filters(records, criteria),
    )


def load_failed(message: str) -> SessionState:
    return SessionState(load_error=message)


def with_criteria(
    state: SessionState, criteria: FilterCriteria, *, refresh_regions: bool = False
) -> SessionState:
    """Recompute the active subset (and optionally region options) for ``criteria``.

    The selected region is kept even when it no longer belongs to the
    selected country.
    """

    regions = state.region_options
    if refresh_regions:
        regions = tuple(region_options(state.records, criteria.country))
    return replace(
        state,
        criteria=criteria,
        region_options=regions,
        active=apply_filters(state.records, criteria),
    )
