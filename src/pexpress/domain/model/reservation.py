"""Reservation requests and outcomes exchanged with the stock service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReservationItem:
    product_id: str
    row_key: str
    quantity: int


@dataclass(frozen=True)
class ReservationResult:
    product_id: str
    row_key: str
    new_stock: int
