# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

import pytest

from battery_deal_tracker.config.config import DealListSettings, StoreSettings
from battery_deal_tracker.models.deal import Deal, DealStatus, PurchaseType, derive_status
from battery_deal_tracker.persistence.repositories.in_memory.deal_repository import (
    InMemoryDealRepository,
)


class FakeEventBus:
    """Minimal event bus fake for asserting dispatched events."""

    def __init__(self) -> None:
        self.dispatched: list[Any] = []

    def dispatch(self, event: Any) -> None:
        self.dispatched.append(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.dispatched if isinstance(e, event_type)]


@pytest.fixture
def D() -> Callable[[Any], Decimal]:
    """Decimal helper: D('1.23') -> Decimal('1.23')."""
    return lambda value: Decimal(str(value))


@pytest.fixture
def settings_factory() -> Callable[..., Any]:
    """Build the minimal settings object services read (store + deal_list)."""

    def _build(
        *,
        page_size: int = 20,
        search_debounce_seconds: float = 0.3,
        recent_deals_limit: int = 5,
        url: str = "https://store.example",
        anon_key: str = "anon-key",
        max_retries: int = 3,
    ) -> Any:
        return SimpleNamespace(
            store=StoreSettings(
                backend="postgrest",
                url=url,
                anon_key=anon_key,
                table="deals",
                timeout_seconds=5.0,
                max_retries=max_retries,
            ),
            deal_list=DealListSettings(
                page_size=page_size,
                search_debounce_seconds=search_debounce_seconds,
                recent_deals_limit=recent_deals_limit,
            ),
        )

    return _build


@pytest.fixture
def settings(settings_factory: Callable[..., Any]) -> Any:
    """Default settings (page size 20, 0.3 s debounce, 5 recent deals)."""
    return settings_factory()


@pytest.fixture
def deal_factory(D: Callable[[Any], Decimal]) -> Callable[..., Deal]:
    """Build a stored Deal with sensible defaults and easy overrides."""
    counter = iter(range(1, 10_000))

    def _build(**overrides: Any) -> Deal:
        sell_price = overrides.pop("sell_price", None)
        sell_price = D(sell_price) if sell_price is not None else None
        purchase_type = PurchaseType(overrides.pop("purchase_type", PurchaseType.BY_PIECE))
        return Deal(
            id=overrides.pop("id", f"deal-{next(counter):04d}"),
            deal_date=overrides.pop("deal_date", date(2024, 3, 15)),
            seller_name=overrides.pop("seller_name", "Alice"),
            purchase_type=purchase_type,
            purchase_price=D(overrides.pop("purchase_price", "100")),
            status=DealStatus(overrides.pop("status", derive_status(sell_price))),
            seller_contact=overrides.pop("seller_contact", None),
            quantity=overrides.pop("quantity", 10 if purchase_type == PurchaseType.BY_PIECE else None),
            weight_lbs=overrides.pop("weight_lbs", None),
            sell_price=sell_price,
            notes=overrides.pop("notes", None),
        )

    return _build


@pytest.fixture
def deal_fields() -> Callable[..., dict[str, Any]]:
    """Raw form values for a new by-piece deal, overridable per test."""

    def _build(**overrides: Any) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "deal_date": "2024-03-15",
            "seller_name": "Alice",
            "purchase_type": "by_piece",
            "quantity": "10",
            "purchase_price": "100",
        }
        fields.update(overrides)
        return fields

    return _build


@pytest.fixture
def deal_repo() -> InMemoryDealRepository:
    """Fresh in-memory deal repository per test."""
    return InMemoryDealRepository()


@pytest.fixture
def fake_event_bus() -> FakeEventBus:
    return FakeEventBus()

