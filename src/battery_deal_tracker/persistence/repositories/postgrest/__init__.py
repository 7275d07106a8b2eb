"""Repository implementations over the remote PostgREST store."""

from battery_deal_tracker.persistence.repositories.postgrest.deal_repository import (
    PostgrestDealRepository,
)

__all__ = ["PostgrestDealRepository"]
