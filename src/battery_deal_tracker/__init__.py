"""Battery deal tracker: deal store, history list and dashboard statistics."""

from battery_deal_tracker.clients import AsyncHttpClient, PostgrestClient
from battery_deal_tracker.config import get_settings
from battery_deal_tracker.DI import Container
from battery_deal_tracker.services import (
    DealListController,
    DealService,
    DealStatisticsService,
)

__version__ = "0.0.1"
__all__ = [
    "AsyncHttpClient",
    "PostgrestClient",
    "Container",
    "DealListController",
    "DealService",
    "DealStatisticsService",
    "get_settings",
]
