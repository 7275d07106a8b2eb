# -*- coding: utf-8 -*-
"""DealService: deal writes for the add/edit views, with lifecycle events."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional

import structlog

from battery_deal_tracker.events.deals.deal_events import (
    DealCreatedEvent,
    DealDeletedEvent,
    DealUpdatedEvent,
)
from battery_deal_tracker.models.deal import Deal

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
        DealFields,
        IDealRepository,
    )


class DealService:
    """Create, open, update and delete deals; keeps the deal open in the edit view.

    Events are published only after the store accepted the write. Errors from the
    repository propagate unchanged.
    """

    def __init__(
        self,
        repository: IDealRepository,
        event_bus: Any,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the service.

        Args:
            repository: Deal repository (injected).
            event_bus: Event bus for deal lifecycle events (injected).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repo = repository
        self._event_bus: EventBus = event_bus
        self._current: Optional[Deal] = None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def current(self) -> Optional[Deal]:
        """Deal loaded by the last open(), if any."""
        return self._current

    async def create(self, fields: DealFields) -> Deal:
        deal = await self._repo.create(fields)
        self._logger.info(
            "deal_created",
            deal_id=deal.id,
            seller_name=deal.seller_name,
            deal_status=deal.status.value,
        )
        self._event_bus.dispatch(
            DealCreatedEvent(deal_id=deal.id, seller_name=deal.seller_name, status=deal.status.value)
        )
        return deal

    async def open(self, deal_id: str) -> Deal:
        """Load a deal for editing and hold it as current."""
        deal = await self._repo.get(deal_id)
        self._current = deal
        return deal

    def close(self) -> None:
        """Forget the current deal (leaving the edit view)."""
        self._current = None

    async def update(self, deal_id: str, fields: DealFields) -> Deal:
        deal = await self._repo.update(deal_id, fields)
        if self._current is not None and self._current.id == deal_id:
            self._current = deal
        self._logger.info("deal_updated", deal_id=deal_id, deal_status=deal.status.value)
        self._event_bus.dispatch(DealUpdatedEvent(deal_id=deal_id, status=deal.status.value))
        return deal

    async def delete(self, deal_id: str) -> None:
        await self._repo.delete(deal_id)
        if self._current is not None and self._current.id == deal_id:
            self._current = None
        self._logger.info("deal_deleted", deal_id=deal_id)
        self._event_bus.dispatch(DealDeletedEvent(deal_id=deal_id))
