"""PostgREST client package."""

from battery_deal_tracker.clients.postgrest.filters import (
    eq,
    ilike_contains,
    order_by,
    parse_content_range,
)
from battery_deal_tracker.clients.postgrest.postgrest_client import PostgrestClient, SelectResult
from battery_deal_tracker.clients.postgrest.schema import DealRecordSchema

__all__ = [
    "DealRecordSchema",
    "PostgrestClient",
    "SelectResult",
    "eq",
    "ilike_contains",
    "order_by",
    "parse_content_range",
]
