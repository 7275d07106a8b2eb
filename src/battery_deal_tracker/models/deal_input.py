# -*- coding: utf-8 -*-
"""DealInput: write-side values for creating or editing a deal.

Form values arrive as loose strings/numbers. Blank strings become None,
text is stripped, numbers and dates are coerced; anything that cannot be
coerced is rejected here instead of being forwarded to the store.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import ValidationError as PydanticValidationError

from battery_deal_tracker.exceptions import ValidationError
from battery_deal_tracker.models.deal import PurchaseType, derive_status

REQUIRED_FIELDS: tuple[str, ...] = ("deal_date", "seller_name", "purchase_type", "purchase_price")
MEASURE_FIELDS: tuple[str, ...] = ("quantity", "weight_lbs")


def _describe(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into one human-readable message."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "input"
        parts.append(f"{location}: {item['msg']}")
    return "Invalid deal input: " + "; ".join(parts)


class DealInput(BaseModel):
    """Coerced deal fields. Every field is optional so the same model serves partial updates."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, frozen=True)

    deal_date: Optional[date] = None
    seller_name: Optional[str] = None
    seller_contact: Optional[str] = None
    purchase_type: Optional[PurchaseType] = None
    quantity: Optional[int] = None
    weight_lbs: Optional[Decimal] = None
    purchase_price: Optional[Decimal] = None
    sell_price: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def parse(cls, fields: Mapping[str, Any] | DealInput) -> DealInput:
        """Coerce raw field values.

        Raises:
            ValidationError: If a value cannot be coerced to its field type.
        """
        if isinstance(fields, DealInput):
            return fields
        try:
            return cls.model_validate(dict(fields))
        except PydanticValidationError as e:
            raise ValidationError(_describe(e)) from e

    def _measures(self) -> dict[str, Any]:
        """quantity/weight_lbs with the one that does not match purchase_type nulled."""
        if self.purchase_type == PurchaseType.BY_PIECE:
            return {"quantity": self.quantity, "weight_lbs": None}
        if self.purchase_type == PurchaseType.BY_WEIGHT:
            return {"quantity": None, "weight_lbs": self.weight_lbs}
        return {}

    def _missing_measure(self) -> Optional[str]:
        """Name of the measure purchase_type calls for when it was not given."""
        if self.purchase_type == PurchaseType.BY_PIECE and self.quantity is None:
            return "quantity"
        if self.purchase_type == PurchaseType.BY_WEIGHT and self.weight_lbs is None:
            return "weight_lbs"
        return None

    def _require_measure(self) -> None:
        missing = self._missing_measure()
        if missing is not None:
            raise ValidationError(f"{missing} is required when purchase_type is {self.purchase_type.value}")

    def to_insert_values(self) -> dict[str, Any]:
        """Full row for a new deal, with status derived from sell_price.

        Raises:
            ValidationError: If a required field is missing, or the measure
                matching purchase_type (quantity or weight_lbs) is not given.
        """
        missing = [name for name in REQUIRED_FIELDS if getattr(self, name) is None]
        if missing:
            raise ValidationError("Missing required field(s): " + ", ".join(missing))
        self._require_measure()
        return {
            "deal_date": self.deal_date,
            "seller_name": self.seller_name,
            "seller_contact": self.seller_contact,
            "purchase_type": self.purchase_type,
            **self._measures(),
            "purchase_price": self.purchase_price,
            "sell_price": self.sell_price,
            "notes": self.notes,
            "status": derive_status(self.sell_price),
        }

    def to_update_values(self) -> dict[str, Any]:
        """Patch with only the fields that were provided.

        sell_price is always part of the patch (omitted means unsold) and
        status is recomputed from it. When purchase_type is given, the
        measure that does not apply is nulled.

        Raises:
            ValidationError: If a required field is blanked, a measure is
                changed without saying which purchase_type it belongs to, or
                purchase_type is set without its measure.
        """
        provided = self.model_fields_set
        blanked = [name for name in REQUIRED_FIELDS if name in provided and getattr(self, name) is None]
        if blanked:
            raise ValidationError("Required field(s) cannot be empty: " + ", ".join(blanked))
        if self.purchase_type is None and provided.intersection(MEASURE_FIELDS):
            raise ValidationError("purchase_type is required when changing quantity or weight_lbs")
        if self.purchase_type is not None:
            self._require_measure()

        values: dict[str, Any] = {
            name: getattr(self, name) for name in type(self).model_fields if name in provided
        }
        if self.purchase_type == PurchaseType.BY_PIECE:
            values["weight_lbs"] = None
        elif self.purchase_type == PurchaseType.BY_WEIGHT:
            values["quantity"] = None
        values["sell_price"] = self.sell_price
        values["status"] = derive_status(self.sell_price)
        return values
