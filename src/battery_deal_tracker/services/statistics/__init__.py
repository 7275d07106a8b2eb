# -*- coding: utf-8 -*-
"""Deal statistics (dashboard aggregates)."""

from battery_deal_tracker.services.statistics.statistics_service import (
    BestSeller,
    DashboardSnapshot,
    DealStatistics,
    DealStatisticsService,
    MonthlySummary,
)

__all__ = [
    "BestSeller",
    "DashboardSnapshot",
    "DealStatistics",
    "DealStatisticsService",
    "MonthlySummary",
]
