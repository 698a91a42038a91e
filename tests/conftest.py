from __future__ import annotations

from pathlib import Path

import pytest

from brewmap.models import BreweryRecord
from brewmap.providers import CsvFileProvider

REPO_ROOT = Path(__file__).resolve().parent.parent
SAMPLE_CSV = REPO_ROOT / "data" / "na_breweries_combined.csv"


class FakeScheduler:
    """Stand-in for a Tk root's ``after``/``after_cancel`` timer API."""

    def __init__(self) -> None:
        self.now = 0
        self._timers: dict[int, tuple[int, object]] = {}
        self._next_id = 0
        self.cancelled: list[int] = []

    def after(self, ms, func):
        self._next_id += 1
        self._timers[self._next_id] = (self.now + ms, func)
        return self._next_id

    def after_cancel(self, handle) -> None:
        self.cancelled.append(handle)
        self._timers.pop(handle, None)

    def advance(self, ms: int) -> None:
        self.now += ms
        due = sorted(
            (when, handle) for handle, (when, _func) in self._timers.items() if when <= self.now
        )
        for _when, handle in due:
            _due, func = self._timers.pop(handle)
            func()

    @property
    def pending(self) -> int:
        return len(self._timers)


@pytest.fixture()
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture()
def sample_provider() -> CsvFileProvider:
    return CsvFileProvider(SAMPLE_CSV)


@pytest.fixture()
def scenario_records() -> tuple[BreweryRecord, ...]:
    return (
        BreweryRecord(id="1", name="Lakeside Micro", category="micro", city="Duluth",
                      country="US", region="MN", latitude=45.0, longitude=-93.0),
        BreweryRecord(id="2", name="Nano Works", category="nano", city="Madison",
                      country="US", region="WI", latitude="bad", longitude=-89.4),
        BreweryRecord(id="3", name="Harbour House", category="", city="Toronto",
                      country="CA", region="ON", latitude=43.6, longitude=-79.4),
    )
