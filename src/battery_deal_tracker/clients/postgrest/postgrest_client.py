# -*- coding: utf-8 -*-
"""PostgREST (Supabase REST) table client: insert, select, update, delete."""

from __future__ import annotations

import structlog
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, cast
from structlog.contextvars import bound_contextvars

from battery_deal_tracker.clients.postgrest.filters import parse_content_range
from battery_deal_tracker.config import Settings

if TYPE_CHECKING:
    from battery_deal_tracker.clients.http import AsyncHttpClient


@dataclass(frozen=True, slots=True)
class SelectResult:
    """Rows of a select plus the exact count when it was requested."""

    records: List[Dict[str, Any]] = field(default_factory=list)
    count: Optional[int] = None


def _json_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _jsonable(row: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: _json_value(value) for key, value in row.items()}


def _rows(data: Any) -> List[Dict[str, Any]]:
    if isinstance(data, list):
        return [cast(Dict[str, Any], x) for x in cast(list[Any], data) if isinstance(x, dict)]
    if isinstance(data, dict):
        return [cast(Dict[str, Any], data)]
    return []


class PostgrestClient:
    """Client for one PostgREST endpoint ({store.url}/rest/v1/{table}).

    Filters are PostgREST operator strings keyed by column, e.g.
    {"status": "eq.sold", "seller_name": "ilike.*ali*"}.
    Writes ask for return=representation so callers get the stored rows back.
    """

    REST_PATH = "/rest/v1"

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.store.url and anon_key).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _table_url(self, table: str) -> str:
        base = (self._settings.store.url or "").rstrip("/")
        return f"{base}{self.REST_PATH}/{table}"

    def _headers(self, prefer: Optional[str] = None) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        anon_key = self._settings.store.anon_key
        if anon_key:
            headers["apikey"] = anon_key
            headers["Authorization"] = f"Bearer {anon_key}"
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def insert(self, table: str, row: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Insert one row and return the stored representation (with generated columns)."""
        with bound_contextvars(store_table=table, store_operation="insert"):
            response = await self._http.post(
                self._table_url(table),
                json=[_jsonable(row)],
                headers=self._headers("return=representation"),
            )
            rows = _rows(response.data)
            self._logger.debug("postgrest_insert_done", store_rows=len(rows))
            return rows

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, str]] = None,
        order: Optional[str] = None,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        count_exact: bool = False,
    ) -> SelectResult:
        """Select rows with optional filters, ordering and offset/limit window.

        Args:
            table: Table name.
            filters: Column -> PostgREST operator filter.
            order: Order clause, e.g. "deal_date.desc,id.desc".
            offset: Rows to skip.
            limit: Maximum rows to return.
            count_exact: Ask for the exact match count (read from Content-Range).

        Returns:
            SelectResult with the rows and, if requested, the exact count.
        """
        params: Dict[str, Any] = {"select": "*"}
        if filters:
            params.update(filters)
        if order:
            params["order"] = order
        if offset is not None:
            params["offset"] = offset
        if limit is not None:
            params["limit"] = limit

        with bound_contextvars(
            store_table=table,
            store_operation="select",
            store_offset=offset,
            store_limit=limit,
        ):
            response = await self._http.get(
                self._table_url(table),
                params=params,
                headers=self._headers("count=exact" if count_exact else None),
            )
            if response.data is not None and not isinstance(response.data, list):
                self._logger.warning(
                    "postgrest_select_non_list",
                    store_response_type=type(response.data).__name__,
                )
            rows = _rows(response.data) if isinstance(response.data, list) else []
            count = parse_content_range(response.headers.get("Content-Range")) if count_exact else None
            self._logger.debug("postgrest_select_done", store_rows=len(rows), store_count=count)
            return SelectResult(records=rows, count=count)

    async def update(
        self,
        table: str,
        *,
        filters: Mapping[str, str],
        patch: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        """Patch matching rows and return them as stored. Empty list if nothing matched."""
        with bound_contextvars(store_table=table, store_operation="update"):
            response = await self._http.patch(
                self._table_url(table),
                params=dict(filters),
                json=_jsonable(patch),
                headers=self._headers("return=representation"),
            )
            rows = _rows(response.data)
            self._logger.debug("postgrest_update_done", store_rows=len(rows))
            return rows

    async def delete(self, table: str, *, filters: Mapping[str, str]) -> List[Dict[str, Any]]:
        """Delete matching rows and return what was removed. Empty list if nothing matched."""
        with bound_contextvars(store_table=table, store_operation="delete"):
            response = await self._http.delete(
                self._table_url(table),
                params=dict(filters),
                headers=self._headers("return=representation"),
            )
            rows = _rows(response.data)
            self._logger.debug("postgrest_delete_done", store_rows=len(rows))
            return rows
