# -*- coding: utf-8 -*-
"""Deal repository backed by the remote PostgREST store."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, cast
from structlog.contextvars import bound_contextvars

from battery_deal_tracker.clients.postgrest.filters import eq, ilike_contains, order_by
from battery_deal_tracker.clients.postgrest.schema import DealRecordSchema
from battery_deal_tracker.exceptions import NotFoundError, StoreError
from battery_deal_tracker.models.deal import Deal
from battery_deal_tracker.models.deal_input import DealInput
from battery_deal_tracker.models.deal_list import DealPage, StatusFilter
from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
    DealFields,
    IDealRepository,
)

if TYPE_CHECKING:
    from battery_deal_tracker.clients.postgrest import PostgrestClient
    from battery_deal_tracker.config import Settings

NEWEST_FIRST = order_by(("deal_date", True), ("id", True))


def _parse_rows(rows: List[Dict[str, Any]]) -> list[Deal]:
    records = cast(List[DealRecordSchema], rows)
    try:
        return [Deal.from_record(record) for record in records]
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise StoreError(f"Malformed deal row from store: {e}", cause=e) from e


class PostgrestDealRepository(IDealRepository):
    """IDealRepository over PostgrestClient (table from settings.store.table)."""

    def __init__(
        self,
        client: "PostgrestClient",
        settings: "Settings",
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the repository.

        Args:
            client: PostgREST client (injected).
            settings: Application settings (uses settings.store.table).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._client = client
        self._table = settings.store.table
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @staticmethod
    def _by_id(deal_id: str) -> Mapping[str, str]:
        return {"id": eq(deal_id)}

    async def create(self, fields: DealFields) -> Deal:
        values = DealInput.parse(fields).to_insert_values()
        rows = await self._client.insert(self._table, values)
        deals = _parse_rows(rows)
        if not deals:
            raise StoreError("Store returned no row for the inserted deal")
        self._logger.debug("deal_repository_created", deal_id=deals[0].id)
        return deals[0]

    async def list(
        self,
        search: str = "",
        status: StatusFilter = "all",
        page: int = 1,
        page_size: int = 20,
    ) -> DealPage:
        self._check_list_args(status, page, page_size)
        filters: Dict[str, str] = {}
        if status != "all":
            filters["status"] = eq(status)
        if search:
            filters["seller_name"] = ilike_contains(search)
        offset, limit = self._window(page, page_size)

        with bound_contextvars(deal_list_page=page, deal_list_page_size=page_size):
            result = await self._client.select(
                self._table,
                filters=filters,
                order=NEWEST_FIRST,
                offset=offset,
                limit=limit,
                count_exact=True,
            )
            items = _parse_rows(result.records)
            self._logger.debug(
                "deal_repository_listed",
                deal_list_items=len(items),
                deal_list_total=result.count,
            )
            return DealPage(items=items, has_more=len(items) == page_size, total_count=result.count)

    async def get(self, deal_id: str) -> Deal:
        result = await self._client.select(self._table, filters=self._by_id(deal_id), limit=1)
        deals = _parse_rows(result.records)
        if not deals:
            raise NotFoundError(deal_id)
        return deals[0]

    async def update(self, deal_id: str, fields: DealFields) -> Deal:
        patch = DealInput.parse(fields).to_update_values()
        rows = await self._client.update(self._table, filters=self._by_id(deal_id), patch=patch)
        deals = _parse_rows(rows)
        if not deals:
            raise NotFoundError(deal_id)
        self._logger.debug("deal_repository_updated", deal_id=deal_id, deal_status=deals[0].status.value)
        return deals[0]

    async def delete(self, deal_id: str) -> None:
        rows = await self._client.delete(self._table, filters=self._by_id(deal_id))
        if not rows:
            raise NotFoundError(deal_id)
        self._logger.debug("deal_repository_deleted", deal_id=deal_id)

    async def get_all(self) -> list[Deal]:
        result = await self._client.select(self._table, order=NEWEST_FIRST)
        return _parse_rows(result.records)
