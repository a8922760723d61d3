"""Pathao request/response schemas."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Pathao's numeric codes for delivery and item types.
DELIVERY_TYPE_NORMAL = 48
DELIVERY_TYPE_ON_DEMAND = 12
ITEM_TYPE_DOCUMENT = 1
ITEM_TYPE_PARCEL = 2

DEFAULT_ITEM_WEIGHT_KG = 0.5

_DELIVERY_TYPES = {
    "normal": DELIVERY_TYPE_NORMAL,
    "48": DELIVERY_TYPE_NORMAL,
    "on_demand": DELIVERY_TYPE_ON_DEMAND,
    "on-demand": DELIVERY_TYPE_ON_DEMAND,
    "12": DELIVERY_TYPE_ON_DEMAND,
}
_ITEM_TYPES = {
    "document": ITEM_TYPE_DOCUMENT,
    "1": ITEM_TYPE_DOCUMENT,
    "parcel": ITEM_TYPE_PARCEL,
    "2": ITEM_TYPE_PARCEL,
}


def _lookup_code(value: Any, table: dict[str, int], label: str) -> int:
    key = str(value).strip().lower()
    if key not in table:
        allowed = ", ".join(sorted(table))
        raise ValueError(f"Unknown {label} {value!r}; expected one of: {allowed}")
    return table[key]


class _CourierModel(BaseModel):
    """Accepts both the storefront's camelCase keys and snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("delivery_type", mode="before", check_fields=False)
    @classmethod
    def _parse_delivery_type(cls, value: Any) -> Any:
        if value is None:
            return DELIVERY_TYPE_NORMAL
        return _lookup_code(value, _DELIVERY_TYPES, "delivery type")

    @field_validator("item_type", mode="before", check_fields=False)
    @classmethod
    def _parse_item_type(cls, value: Any) -> Any:
        if value is None:
            return ITEM_TYPE_PARCEL
        return _lookup_code(value, _ITEM_TYPES, "item type")


class PriceRequest(_CourierModel):
    store_id: Optional[int] = Field(default=None, description="Falls back to the configured PATHAO_STORE_ID.")
    recipient_city: int
    recipient_zone: int
    delivery_type: int = DELIVERY_TYPE_NORMAL
    item_type: int = ITEM_TYPE_PARCEL
    item_weight: Optional[float] = Field(default=None, ge=0)


class PriceQuote(BaseModel):
    price: float = 0
    cod_charge: float = 0
    promo_discount: float = 0
    total_price: float = 0


class DeliveryOrderRequest(_CourierModel):
    store_id: Optional[int] = Field(default=None, description="Falls back to the configured PATHAO_STORE_ID.")
    merchant_order_id: str
    recipient_name: str
    recipient_phone: str
    recipient_address: str
    recipient_city: int
    recipient_zone: int
    recipient_area: int
    delivery_type: int = DELIVERY_TYPE_NORMAL
    item_type: int = ITEM_TYPE_PARCEL
    item_quantity: int = Field(default=1, ge=1)
    item_weight: float = Field(default=DEFAULT_ITEM_WEIGHT_KG, gt=0)
    item_description: str = ""
    amount_to_collect: int = Field(default=0, ge=0)
    special_instruction: Optional[str] = None

