# -*- coding: utf-8 -*-
"""List-side value objects: filters and one fetched page of deals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

from battery_deal_tracker.models.deal import Deal

StatusFilter = Literal["all", "purchased", "sold"]
STATUS_FILTERS: tuple[StatusFilter, ...] = ("all", "purchased", "sold")


@dataclass(frozen=True, slots=True)
class DealFilters:
    """Search text (seller name substring) and status filter of the history list."""

    search: str = ""
    status: StatusFilter = "all"

    def with_search(self, search: str) -> DealFilters:
        return DealFilters(search=search, status=self.status)

    def with_status(self, status: StatusFilter) -> DealFilters:
        return DealFilters(search=self.search, status=status)


@dataclass(frozen=True, slots=True)
class DealPage:
    """One window of the filtered, date-ordered deal list."""

    items: list[Deal] = field(default_factory=list)
    has_more: bool = False
    """True iff the page came back full (len(items) == page_size); a full last page still says True."""
    total_count: Optional[int] = None
    """Exact number of matching deals as reported by the store, when available."""
