# -*- coding: utf-8 -*-
"""Domain models."""

from battery_deal_tracker.models.deal import Deal, DealStatus, PurchaseType, derive_status
from battery_deal_tracker.models.deal_input import DealInput
from battery_deal_tracker.models.deal_list import (
    STATUS_FILTERS,
    DealFilters,
    DealPage,
    StatusFilter,
)

__all__ = [
    "Deal",
    "DealFilters",
    "DealInput",
    "DealPage",
    "DealStatus",
    "PurchaseType",
    "STATUS_FILTERS",
    "StatusFilter",
    "derive_status",
]
