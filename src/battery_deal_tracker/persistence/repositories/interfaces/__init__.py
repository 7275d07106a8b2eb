# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and postgrest/."""

from battery_deal_tracker.persistence.repositories.interfaces.deal_repository import (
    DealFields,
    IDealRepository,
)

__all__ = ["DealFields", "IDealRepository"]
