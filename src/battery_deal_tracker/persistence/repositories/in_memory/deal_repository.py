"""In-memory deal repository (keyed by deal id)."""

from __future__ import annotations

from dataclasses import replace
from uuid import uuid4

from battery_deal_tracker.exceptions import NotFoundError
from battery_deal_tracker.models.deal import Deal
from battery_deal_tracker.models.deal_input import DealInput
from battery_deal_tracker.models.deal_list import DealPage, StatusFilter
from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
    DealFields,
    IDealRepository,
)


def _newest_first(deals: list[Deal]) -> list[Deal]:
    """Sort key mirrors the remote order: deal_date desc, then id desc."""
    return sorted(deals, key=lambda d: (d.deal_date, d.id), reverse=True)


class InMemoryDealRepository(IDealRepository):
    """In-memory implementation of IDealRepository. Ids are random UUID strings."""

    def __init__(self) -> None:
        """Initialize an empty in-memory store."""
        self._store: dict[str, Deal] = {}

    async def create(self, fields: DealFields) -> Deal:
        values = DealInput.parse(fields).to_insert_values()
        deal = Deal.from_values(str(uuid4()), values)
        self._store[deal.id] = deal
        return deal

    async def list(
        self,
        search: str = "",
        status: StatusFilter = "all",
        page: int = 1,
        page_size: int = 20,
    ) -> DealPage:
        self._check_list_args(status, page, page_size)
        needle = search.casefold()
        matching = [
            d
            for d in self._store.values()
            if (status == "all" or d.status.value == status)
            and (not needle or needle in d.seller_name.casefold())
        ]
        offset, limit = self._window(page, page_size)
        items = _newest_first(matching)[offset : offset + limit]
        return DealPage(items=items, has_more=len(items) == page_size, total_count=len(matching))

    async def get(self, deal_id: str) -> Deal:
        deal = self._store.get(deal_id)
        if deal is None:
            raise NotFoundError(deal_id)
        return deal

    async def update(self, deal_id: str, fields: DealFields) -> Deal:
        values = DealInput.parse(fields).to_update_values()
        current = await self.get(deal_id)
        updated = replace(current, **values)
        self._store[deal_id] = updated
        return updated

    async def delete(self, deal_id: str) -> None:
        if self._store.pop(deal_id, None) is None:
            raise NotFoundError(deal_id)

    async def get_all(self) -> list[Deal]:
        return _newest_first(list(self._store.values()))
