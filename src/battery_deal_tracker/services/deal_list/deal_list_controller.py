# -*- coding: utf-8 -*-
"""DealListController: filtered, incrementally loaded deal history list.

State lives in an immutable DealListState that is replaced on every
transition and pushed to subscribers. Each reset starts a new generation;
a fetch that returns after a newer reset is dropped instead of applied.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.contextvars import bound_contextvars

from battery_deal_tracker.events.deals.deal_events import (
    DealListLoadedEvent,
    DealListLoadFailedEvent,
)
from battery_deal_tracker.models.deal import Deal
from battery_deal_tracker.models.deal_list import DealFilters, StatusFilter
from battery_deal_tracker.utils.debounce import Debouncer

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from battery_deal_tracker.config import Settings
    from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
        IDealRepository,
    )

StateListener = Callable[["DealListState"], None]


@dataclass(frozen=True, slots=True)
class DealListState:
    """Snapshot of the history list."""

    filters: DealFilters
    page: int
    """Next page to fetch (1-based)."""
    page_size: int
    has_more: bool
    items: tuple[Deal, ...]
    is_loading: bool

    @classmethod
    def initial(cls, page_size: int, filters: Optional[DealFilters] = None) -> DealListState:
        return cls(
            filters=filters or DealFilters(),
            page=1,
            page_size=page_size,
            has_more=True,
            items=(),
            is_loading=False,
        )

    @property
    def is_empty(self) -> bool:
        """No deals to show and nothing in flight (the "No deals found" case)."""
        return not self.items and not self.is_loading


class DealListController:
    """Drives the history list: reset, load next page, debounced search, status filter."""

    def __init__(
        self,
        repository: IDealRepository,
        settings: Settings,
        event_bus: Any,
        *,
        page_size: Optional[int] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            repository: Deal repository (injected).
            settings: Application settings (uses settings.deal_list).
            event_bus: Event bus for list loaded/failed events (injected).
            page_size: Overrides settings.deal_list.page_size.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = repository
        self._event_bus: EventBus = event_bus
        self._state = DealListState.initial(page_size or settings.deal_list.page_size)
        self._generation = 0
        self._listeners: list[StateListener] = []
        self._search_debouncer = Debouncer(
            settings.deal_list.search_debounce_seconds,
            get_logger=get_logger,
            logger_name="DealListSearchDebouncer",
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def state(self) -> DealListState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, state: DealListState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def reset(self, filters: Optional[DealFilters] = None) -> DealListState:
        """Back to page 1 with no items and has_more=True; does not fetch.

        Any fetch still in flight belongs to the previous generation and will be dropped.
        """
        self._generation += 1
        self._set_state(
            DealListState.initial(self._state.page_size, filters or self._state.filters)
        )
        return self._state

    async def load_next(self, replace_items: bool = False) -> DealListState:
        """Fetch the next page and append it (or replace the list with it).

        No-op while a fetch is in flight, or when appending and has_more is False.
        On failure or cancellation the page and items are left unchanged,
        is_loading is cleared and the error is re-raised.
        """
        state = self._state
        if state.is_loading:
            self._logger.debug("deal_list_load_skipped", reason="already_loading")
            return state
        if not replace_items and not state.has_more:
            self._logger.debug("deal_list_load_skipped", reason="no_more_pages")
            return state

        generation = self._generation
        filters = state.filters
        self._set_state(replace(state, is_loading=True))

        with bound_contextvars(
            deal_list_page=state.page,
            deal_list_search=filters.search,
            deal_list_status=filters.status,
        ):
            try:
                result = await self._repo.list(
                    search=filters.search,
                    status=filters.status,
                    page=state.page,
                    page_size=state.page_size,
                )
            except asyncio.CancelledError:
                if generation == self._generation:
                    self._set_state(replace(self._state, is_loading=False))
                self._logger.debug("deal_list_load_cancelled")
                raise
            except Exception as e:
                if generation == self._generation:
                    self._set_state(replace(self._state, is_loading=False))
                    self._event_bus.dispatch(
                        DealListLoadFailedEvent(
                            page=state.page,
                            search=filters.search,
                            status=filters.status,
                            error_message=str(e),
                        )
                    )
                self._logger.warning(
                    "deal_list_load_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            if generation != self._generation:
                self._logger.debug("deal_list_stale_page_dropped", deal_list_items=len(result.items))
                return self._state

            current = self._state
            items = tuple(result.items) if replace_items else current.items + tuple(result.items)
            self._set_state(
                replace(
                    current,
                    items=items,
                    page=current.page + 1,
                    has_more=result.has_more,
                    is_loading=False,
                )
            )
            self._logger.debug(
                "deal_list_page_loaded",
                deal_list_fetched=len(result.items),
                deal_list_items=len(items),
                deal_list_has_more=result.has_more,
            )
            self._event_bus.dispatch(
                DealListLoadedEvent(
                    page=state.page,
                    item_count=len(items),
                    has_more=result.has_more,
                    search=filters.search,
                    status=filters.status,
                )
            )
            return self._state

    async def apply_filters(self, filters: DealFilters) -> DealListState:
        """Reset to the given filters and load their first page."""
        self.reset(filters)
        return await self.load_next(replace_items=True)

    async def open(self, filters: Optional[DealFilters] = None) -> DealListState:
        """Entry point of the history view: default (or given) filters, first page."""
        self._search_debouncer.cancel()
        return await self.apply_filters(filters or DealFilters())

    async def set_status(self, status: StatusFilter) -> DealListState:
        """Status filter changes apply immediately."""
        return await self.apply_filters(self._state.filters.with_status(status))

    def set_search(self, search: str) -> None:
        """Debounced search: only the last text within the quiet window reloads the list.

        The status filter is read when the reload fires, not when the text was typed.
        """

        async def _reload() -> None:
            await self.apply_filters(self._state.filters.with_search(search))

        self._search_debouncer.schedule(_reload)

    @property
    def search_pending(self) -> bool:
        return self._search_debouncer.pending

    async def flush_search(self) -> None:
        """Wait for a scheduled search reload to fire and finish."""
        await self._search_debouncer.flush()

    async def aclose(self) -> None:
        """Drop any pending search reload and stop notifying listeners."""
        await self._search_debouncer.aclose()
        self._listeners.clear()
