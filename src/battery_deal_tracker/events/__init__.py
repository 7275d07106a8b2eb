# -*- coding: utf-8 -*-
"""Event bus and event types."""

from battery_deal_tracker.events.bus import get_event_bus, set_event_bus
from battery_deal_tracker.events.deals import (
    DealCreatedEvent,
    DealDeletedEvent,
    DealListLoadedEvent,
    DealListLoadFailedEvent,
    DealUpdatedEvent,
)

__all__ = [
    "get_event_bus",
    "set_event_bus",
    "DealCreatedEvent",
    "DealDeletedEvent",
    "DealListLoadedEvent",
    "DealListLoadFailedEvent",
    "DealUpdatedEvent",
]
