"""Persistence layer (repositories, etc.)."""

from battery_deal_tracker.persistence.repositories import (
    IDealRepository,
    InMemoryDealRepository,
    PostgrestDealRepository,
)

__all__ = [
    "IDealRepository",
    "InMemoryDealRepository",
    "PostgrestDealRepository",
]
