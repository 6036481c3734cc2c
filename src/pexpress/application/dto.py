"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI edges and the application layer
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ReserveItemSpec:
    """Input: one row to decrement and by how much."""

    product_id: str
    row_key: str
    quantity: int


@dataclass(frozen=True)
class StockLevelDTO:
    """Output: the stock a row was left with after a reservation."""

    product_id: str
    row_key: str
    new_stock: int


@dataclass(frozen=True)
class RowDTO:
    key: str
    flavor: str
    stock: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog entry as shown on the order form."""

    id: str
    name: str
    rows: list[RowDTO]
