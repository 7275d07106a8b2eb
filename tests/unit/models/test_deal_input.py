# -*- coding: utf-8 -*-
"""Unit tests for DealInput coercion and insert/update value building."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal
from typing import Any

import pytest

from battery_deal_tracker.exceptions import ValidationError
from battery_deal_tracker.models.deal import DealStatus, PurchaseType
from battery_deal_tracker.models.deal_input import DealInput


def test_parse_coerces_form_strings(deal_fields: Callable[..., dict[str, Any]]) -> None:
    parsed = DealInput.parse(deal_fields(seller_name="  Alice  ", sell_price="", notes=" "))

    assert parsed.deal_date == date(2024, 3, 15)
    assert parsed.seller_name == "Alice"
    assert parsed.purchase_type == PurchaseType.BY_PIECE
    assert parsed.quantity == 10
    assert parsed.purchase_price == Decimal("100")
    assert parsed.sell_price is None
    assert parsed.notes is None


def test_parse_rejects_uncoercible_values(deal_fields: Callable[..., dict[str, Any]]) -> None:
    with pytest.raises(ValidationError, match="purchase_price"):
        DealInput.parse(deal_fields(purchase_price="a lot"))


def test_parse_rejects_unknown_purchase_type(deal_fields: Callable[..., dict[str, Any]]) -> None:
    with pytest.raises(ValidationError, match="purchase_type"):
        DealInput.parse(deal_fields(purchase_type="by_volume"))


def test_insert_values_derive_status_and_null_other_measure(
    deal_fields: Callable[..., dict[str, Any]],
) -> None:
    values = DealInput.parse(deal_fields(weight_lbs="12", sell_price="130")).to_insert_values()

    assert values["status"] == DealStatus.SOLD
    assert values["quantity"] == 10
    assert values["weight_lbs"] is None


def test_insert_values_for_weight_deal_keep_weight_only(
    deal_fields: Callable[..., dict[str, Any]],
) -> None:
    values = DealInput.parse(
        deal_fields(purchase_type="by_weight", weight_lbs="25.5", quantity="3")
    ).to_insert_values()

    assert values["status"] == DealStatus.PURCHASED
    assert values["weight_lbs"] == Decimal("25.5")
    assert values["quantity"] is None


@pytest.mark.parametrize("missing", ["deal_date", "seller_name", "purchase_type", "purchase_price"])
def test_insert_values_require_mandatory_fields(
    deal_fields: Callable[..., dict[str, Any]],
    missing: str,
) -> None:
    fields = deal_fields()
    fields.pop(missing)

    with pytest.raises(ValidationError, match=missing):
        DealInput.parse(fields).to_insert_values()


def test_update_values_only_carry_provided_fields_and_always_sell_price() -> None:
    values = DealInput.parse({"notes": "sold at yard"}).to_update_values()

    assert values == {
        "notes": "sold at yard",
        "sell_price": None,
        "status": DealStatus.PURCHASED,
    }


def test_update_values_recompute_status_from_sell_price() -> None:
    values = DealInput.parse({"sell_price": "130"}).to_update_values()

    assert values["sell_price"] == Decimal("130")
    assert values["status"] == DealStatus.SOLD


def test_update_values_reject_blanked_required_field() -> None:
    with pytest.raises(ValidationError, match="seller_name"):
        DealInput.parse({"seller_name": "   "}).to_update_values()


def test_update_values_reject_measure_without_purchase_type() -> None:
    with pytest.raises(ValidationError, match="purchase_type"):
        DealInput.parse({"quantity": "4"}).to_update_values()


def test_update_values_switching_to_weight_clears_quantity() -> None:
    values = DealInput.parse({"purchase_type": "by_weight", "weight_lbs": "40"}).to_update_values()

    assert values["purchase_type"] == PurchaseType.BY_WEIGHT
    assert values["weight_lbs"] == Decimal("40")
    assert values["quantity"] is None


@pytest.mark.parametrize(
    ("purchase_type", "missing"),
    [("by_piece", "quantity"), ("by_weight", "weight_lbs")],
)
def test_insert_values_require_measure_matching_purchase_type(
    deal_fields: Callable[..., dict[str, Any]],
    purchase_type: str,
    missing: str,
) -> None:
    fields = deal_fields(purchase_type=purchase_type, quantity="", weight_lbs="")

    with pytest.raises(ValidationError, match=missing):
        DealInput.parse(fields).to_insert_values()


def test_insert_values_reject_weight_only_for_piece_deal(
    deal_fields: Callable[..., dict[str, Any]],
) -> None:
    with pytest.raises(ValidationError, match="quantity"):
        DealInput.parse(deal_fields(quantity=None, weight_lbs="12")).to_insert_values()


@pytest.mark.parametrize(
    ("fields", "missing"),
    [
        ({"purchase_type": "by_weight"}, "weight_lbs"),
        ({"purchase_type": "by_piece", "weight_lbs": "40"}, "quantity"),
    ],
)
def test_update_values_switching_purchase_type_requires_its_measure(
    fields: dict[str, Any],
    missing: str,
) -> None:
    with pytest.raises(ValidationError, match=missing):
        DealInput.parse(fields).to_update_values()
