# -*- coding: utf-8 -*-
"""Deal events."""

from battery_deal_tracker.events.deals.deal_events import (
    DealCreatedEvent,
    DealDeletedEvent,
    DealListLoadedEvent,
    DealListLoadFailedEvent,
    DealUpdatedEvent,
)

__all__ = [
    "DealCreatedEvent",
    "DealDeletedEvent",
    "DealListLoadedEvent",
    "DealListLoadFailedEvent",
    "DealUpdatedEvent",
]
