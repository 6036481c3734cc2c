"""Request bodies accepted by the HTTP endpoints.

Field names follow the JSON the order form already sends (camelCase).
Quantities are only typed here; positivity is a domain rule.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


def _reject_bool(value: object) -> object:
    # pydantic's lax int would otherwise read true as 1
    if isinstance(value, bool):
        raise ValueError("quantity must be a number, not a boolean")
    return value


class UpdateStockRequest(BaseModel):
    productId: str
    rowKey: str
    quantity: int

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_not_bool(cls, value: object) -> object:
        return _reject_bool(value)


class BatchItem(BaseModel):
    productId: str
    rowKey: str
    qty: int

    @field_validator("qty", mode="before")
    @classmethod
    def qty_not_bool(cls, value: object) -> object:
        return _reject_bool(value)


class BatchReservationRequest(BaseModel):
    items: list[BatchItem]
