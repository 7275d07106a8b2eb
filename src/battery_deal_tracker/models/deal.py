# -*- coding: utf-8 -*-
"""Deal: one battery purchase and its optional resale.

The store assigns the id. Status is never set on its own: it is derived from
sell_price on every write (sold iff sell_price is present).
Exactly one of quantity / weight_lbs is meaningful, matching purchase_type.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional


class PurchaseType(str, Enum):
    """How the batteries were bought."""

    BY_PIECE = "by_piece"
    BY_WEIGHT = "by_weight"


class DealStatus(str, Enum):
    """Derived deal state."""

    PURCHASED = "purchased"
    SOLD = "sold"


def derive_status(sell_price: Optional[Decimal]) -> DealStatus:
    """Return SOLD iff a sell price is present."""
    return DealStatus.SOLD if sell_price is not None else DealStatus.PURCHASED


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    # str() first so 0.1 stays Decimal("0.1") instead of its binary expansion
    return Decimal(str(value))


def _to_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass(frozen=True, slots=True)
class Deal:
    """A stored deal (transient copy; the remote store is the system of record)."""

    id: str
    deal_date: date
    seller_name: str
    purchase_type: PurchaseType
    purchase_price: Decimal
    status: DealStatus

    seller_contact: Optional[str] = None
    quantity: Optional[int] = None
    """Number of pieces; only for BY_PIECE deals."""
    weight_lbs: Optional[Decimal] = None
    """Weight in pounds; only for BY_WEIGHT deals."""
    sell_price: Optional[Decimal] = None
    """None while unsold."""
    notes: Optional[str] = None

    @property
    def is_sold(self) -> bool:
        return self.status == DealStatus.SOLD

    @property
    def profit(self) -> Optional[Decimal]:
        """sell_price - purchase_price for sold deals, None while unsold."""
        if self.sell_price is None:
            return None
        return self.sell_price - self.purchase_price

    @property
    def month_key(self) -> str:
        """YYYY-MM bucket of the deal date."""
        return self.deal_date.isoformat()[:7]

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Deal:
        """Build from a store row (JSON types: ISO date string, numbers, nulls)."""
        quantity = record.get("quantity")
        return cls(
            id=str(record["id"]),
            deal_date=_to_date(record["deal_date"]),
            seller_name=str(record["seller_name"]),
            purchase_type=PurchaseType(record["purchase_type"]),
            purchase_price=_to_decimal(record["purchase_price"]) or Decimal("0"),
            status=DealStatus(record.get("status") or derive_status(_to_decimal(record.get("sell_price")))),
            seller_contact=record.get("seller_contact"),
            quantity=int(quantity) if quantity is not None else None,
            weight_lbs=_to_decimal(record.get("weight_lbs")),
            sell_price=_to_decimal(record.get("sell_price")),
            notes=record.get("notes"),
        )

    @classmethod
    def from_values(cls, deal_id: str, values: Mapping[str, Any]) -> Deal:
        """Build from already-typed write values (see DealInput) plus an id."""
        return cls(
            id=deal_id,
            deal_date=values["deal_date"],
            seller_name=values["seller_name"],
            purchase_type=PurchaseType(values["purchase_type"]),
            purchase_price=values["purchase_price"],
            status=DealStatus(values["status"]),
            seller_contact=values.get("seller_contact"),
            quantity=values.get("quantity"),
            weight_lbs=values.get("weight_lbs"),
            sell_price=values.get("sell_price"),
            notes=values.get("notes"),
        )

    def to_values(self) -> dict[str, Any]:
        """Typed field values (without id), the inverse of from_values."""
        return {
            "deal_date": self.deal_date,
            "seller_name": self.seller_name,
            "seller_contact": self.seller_contact,
            "purchase_type": self.purchase_type,
            "quantity": self.quantity,
            "weight_lbs": self.weight_lbs,
            "purchase_price": self.purchase_price,
            "sell_price": self.sell_price,
            "notes": self.notes,
            "status": self.status,
        }
