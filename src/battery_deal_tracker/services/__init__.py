# -*- coding: utf-8 -*-
"""Application services."""

from battery_deal_tracker.services.deal_list import DealListController, DealListState
from battery_deal_tracker.services.deals import DealService
from battery_deal_tracker.services.statistics import (
    BestSeller,
    DashboardSnapshot,
    DealStatistics,
    DealStatisticsService,
    MonthlySummary,
)

__all__ = [
    "BestSeller",
    "DashboardSnapshot",
    "DealListController",
    "DealListState",
    "DealService",
    "DealStatistics",
    "DealStatisticsService",
    "MonthlySummary",
]
