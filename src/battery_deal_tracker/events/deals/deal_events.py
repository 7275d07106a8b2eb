"""Deal lifecycle and deal list events (emitted by DealService and DealListController)."""

from __future__ import annotations

from bubus import BaseEvent  # type: ignore[import-untyped]


class DealCreatedEvent(BaseEvent[None]):
    """Emitted after a new deal was stored."""

    deal_id: str
    seller_name: str
    status: str


class DealUpdatedEvent(BaseEvent[None]):
    """Emitted after a deal was edited. status is the recomputed one."""

    deal_id: str
    status: str


class DealDeletedEvent(BaseEvent[None]):
    """Emitted after a deal was removed from the store."""

    deal_id: str


class DealListLoadedEvent(BaseEvent[None]):
    """Emitted when the history list applied a fetched page."""

    page: int
    """Page that was fetched (1-based)."""
    item_count: int
    """Number of deals now held by the list."""
    has_more: bool
    search: str
    status: str


class DealListLoadFailedEvent(BaseEvent[None]):
    """Emitted when fetching a history page failed; list state is left as it was."""

    page: int
    search: str
    status: str
    error_message: str
