# -*- coding: utf-8 -*-
"""Deal history list: pagination, search and status filter."""

from battery_deal_tracker.services.deal_list.deal_list_controller import (
    DealListController,
    DealListState,
)

__all__ = ["DealListController", "DealListState"]
