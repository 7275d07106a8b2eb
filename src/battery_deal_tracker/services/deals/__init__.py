# -*- coding: utf-8 -*-
"""Deal write service."""

from battery_deal_tracker.services.deals.deal_service import DealService

__all__ = ["DealService"]
