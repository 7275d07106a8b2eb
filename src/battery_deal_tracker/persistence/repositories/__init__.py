# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, postgrest)."""

from battery_deal_tracker.persistence.repositories.interfaces import IDealRepository
from battery_deal_tracker.persistence.repositories.in_memory import InMemoryDealRepository
from battery_deal_tracker.persistence.repositories.postgrest import PostgrestDealRepository

__all__ = [
    "IDealRepository",
    "InMemoryDealRepository",
    "PostgrestDealRepository",
]
