"""Controller logic for the brewery map."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional, Protocol

from .filters import ANY, FilterCriteria
from .normalize import normalize_rows
from .providers import BaseDataProvider, DataLoadError
from .state import SessionState, load_failed, loaded, with_criteria

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    """Timer API of a Tk root: ``after`` returns a handle ``after_cancel`` accepts."""

    def after(self, ms: int, func: Callable[[], None]) -> Any:
        ...

    def after_cancel(self, handle: Any) -> None:
        ...


class Debouncer:
    """Coalesce rapid calls into one, run ``delay_ms`` after the last call.

    Every call bumps a generation counter; a timer that fires for an older
    generation does nothing even if cancelling it failed.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int, callback: Callable[..., None]) -> None:
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.callback = callback
        self._generation = 0
        self._handle: Any = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def __call__(self, *args: Any) -> None:
        self.cancel()
        generation = self._generation
        self._handle = self.scheduler.after(self.delay_ms, lambda: self._fire(generation, args))

    def cancel(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self.scheduler.after_cancel(self._handle)
            self._handle = None

    def _fire(self, generation: int, args: tuple) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self.callback(*args)


class BrewMapController:
    """Holds the session state and turns UI events into state updates."""

    def __init__(
        self,
        provider: BaseDataProvider,
        *,
        scheduler: Optional[Scheduler] = None,
        debounce_ms: int = 120,
    ) -> None:
        self.provider = provider
        self.state = SessionState()
        self._listeners: List[Callable[[SessionState], None]] = []
        self._query_debouncer: Optional[Debouncer] = None
        if scheduler is not None:
            self.set_scheduler(scheduler, debounce_ms)

    def set_scheduler(self, scheduler: Scheduler, debounce_ms: int) -> None:
        """Debounce text input on ``scheduler`` from now on."""

        if self._query_debouncer is not None:
            self._query_debouncer.cancel()
        self._query_debouncer = Debouncer(scheduler, debounce_ms, self.apply_query)

    def subscribe(self, listener: Callable[[SessionState], None]) -> None:
        self._listeners.append(listener)

    def _publish(self, state: SessionState) -> SessionState:
        self.state = state
        for listener in self._listeners:
            listener(state)
        return state

    def load(self) -> SessionState:
        """Load and normalize the data; a failure leaves an empty state and re-raises."""

        try:
            data = self.provider.load()
        except DataLoadError as exc:
            logger.error("Could not load brewery data from %s: %s", self.provider.description, exc)
            self._publish(load_failed(str(exc)))
            raise
        records = normalize_rows(data.rows, data.fields)
        state = loaded(records)
        logger.info(
            "Loaded %d breweries (%d renderable)", len(state.records), len(state.renderable)
        )
        return self._publish(state)

    def _update(self, *, refresh_regions: bool = False, **changes: str) -> SessionState:
        criteria = replace(self.state.criteria, **changes)
        return self._publish(with_criteria(self.state, criteria, refresh_regions=refresh_regions))

    def select_category(self, category: str) -> SessionState:
        return self._update(category=category)

    def select_country(self, country: str) -> SessionState:
        return self._update(country=country, refresh_regions=True)

    def select_region(self, region: str) -> SessionState:
        return self._update(region=region)

    def apply_query(self, query: str) -> SessionState:
        return self._update(query=query)

    def update_query(self, query: str) -> None:
        """Text-input handler; debounced when the controller has a scheduler."""

        if self._query_debouncer is None:
            self.apply_query(query)
        else:
            self._query_debouncer(query)

    def reset(self) -> SessionState:
        if self._query_debouncer is not None:
            self._query_debouncer.cancel()
        criteria = FilterCriteria(category=ANY, country=ANY, region=ANY, query="")
        return self._publish(with_criteria(self.state, criteria, refresh_regions=True))
