# -*- coding: utf-8 -*-
"""Abstract interface for deal storage (remote PostgREST store, in-memory, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from battery_deal_tracker.exceptions import ValidationError
from battery_deal_tracker.models.deal import Deal
from battery_deal_tracker.models.deal_input import DealInput
from battery_deal_tracker.models.deal_list import STATUS_FILTERS, DealPage, StatusFilter

DealFields = Mapping[str, Any] | DealInput


class IDealRepository(ABC):
    """Interface for deal CRUD and filtered, date-ordered, paginated queries.

    Implementations derive status from sell_price on every write and null the
    quantity/weight field that does not match purchase_type. Listing orders by
    deal_date descending, then id descending.
    """

    @abstractmethod
    async def create(self, fields: DealFields) -> Deal:
        """Insert a deal and return it as stored (with its new id).

        Raises:
            ValidationError: If required fields are missing or values cannot be coerced.
            StoreError: If the store call fails.
        """
        ...

    @abstractmethod
    async def list(
        self,
        search: str = "",
        status: StatusFilter = "all",
        page: int = 1,
        page_size: int = 20,
    ) -> DealPage:
        """Return the page-th window of deals matching search (seller name) and status.

        has_more is True iff the window came back full.
        """
        ...

    @abstractmethod
    async def get(self, deal_id: str) -> Deal:
        """Return the deal by id.

        Raises:
            NotFoundError: If no deal has this id.
        """
        ...

    @abstractmethod
    async def update(self, deal_id: str, fields: DealFields) -> Deal:
        """Patch the given fields; sell_price is always written and status recomputed.

        Raises:
            NotFoundError: If no deal has this id.
            ValidationError: If a required field is blanked or a value cannot be coerced.
        """
        ...

    @abstractmethod
    async def delete(self, deal_id: str) -> None:
        """Hard-delete the deal.

        Raises:
            NotFoundError: If no deal has this id.
        """
        ...

    @abstractmethod
    async def get_all(self) -> list[Deal]:
        """Return every deal (unpaginated), in list order."""
        ...

    # -------------------------------------------------------------------------
    # Shared argument checks
    # -------------------------------------------------------------------------

    @staticmethod
    def _check_list_args(status: str, page: int, page_size: int) -> None:
        if status not in STATUS_FILTERS:
            raise ValidationError(f"Unknown status filter: {status!r}")
        if page < 1:
            raise ValidationError("page must be >= 1")
        if page_size < 1:
            raise ValidationError("page_size must be >= 1")

    @staticmethod
    def _window(page: int, page_size: int) -> tuple[int, int]:
        """(offset, limit) for a 1-based page."""
        return (page - 1) * page_size, page_size
