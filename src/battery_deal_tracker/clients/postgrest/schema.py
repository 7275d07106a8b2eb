"""Deal store row types (table `deals`, JSON as returned by PostgREST)."""

from __future__ import annotations

from typing import Literal, TypedDict


class DealRecordSchema(TypedDict, total=False):
    """One `deals` row. Keys match the table columns (snake_case)."""

    id: str
    deal_date: str
    """ISO date, YYYY-MM-DD."""
    seller_name: str
    seller_contact: str | None
    purchase_type: Literal["by_piece", "by_weight"]
    quantity: int | None
    weight_lbs: float | None
    purchase_price: float
    sell_price: float | None
    notes: str | None
    status: Literal["purchased", "sold"]
