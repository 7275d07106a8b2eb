"""HTTP and store clients."""

from battery_deal_tracker.clients.http import AsyncHttpClient, HttpResponse
from battery_deal_tracker.clients.postgrest import PostgrestClient, SelectResult

__all__ = [
    "AsyncHttpClient",
    "HttpResponse",
    "PostgrestClient",
    "SelectResult",
]
