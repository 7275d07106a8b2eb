"""In-memory repository implementations."""

from battery_deal_tracker.persistence.repositories.in_memory.deal_repository import (
    InMemoryDealRepository,
)

__all__ = ["InMemoryDealRepository"]
