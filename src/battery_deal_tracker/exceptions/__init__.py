"""Exceptions subpackage."""

from battery_deal_tracker.exceptions.exceptions import (
    DealTrackerError,
    MissingRequiredConfigError,
    NotFoundError,
    RateLimitError,
    StoreError,
    ValidationError,
)

__all__ = [
    "DealTrackerError",
    "MissingRequiredConfigError",
    "NotFoundError",
    "RateLimitError",
    "StoreError",
    "ValidationError",
]
