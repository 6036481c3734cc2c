"""Domain service: Stock Reservation.

Decrements row stock in the remote document store with revision-based
optimistic locking.  Each attempt is a read-check-write cycle:

  1. read a snapshot of the product and its revision token
  2. check the requested quantity against the snapshot's stock
  3. write a decrement guarded by the revision read in step 1

If another writer committed in between, the store rejects the write and
the whole cycle starts over from a fresh read, up to MAX_ATTEMPTS.
"""

from __future__ import annotations

import logging

from pexpress.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    RevisionMismatchError,
    StockConflictError,
    UpstreamError,
    ValidationError,
)
from pexpress.domain.model.product import Product, Row
from pexpress.domain.model.reservation import ReservationItem, ReservationResult
from pexpress.domain.model.value_objects import Quantity
from pexpress.domain.repository.product_repository import (
    ProductRepository,
    StockDecrement,
)

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    # --- Single row -----------------------------------------------------------

    def reserve(self, product_id: str, row_key: str, quantity: int) -> ReservationResult:
        """Decrement one row's stock by ``quantity``.

        ``new_stock`` is computed from the snapshot the successful write
        was guarded by; it is not re-read after the write.
        """
        _require_identifier(product_id, "productId")
        _require_identifier(row_key, "rowKey")
        qty = Quantity(quantity)

        last_seen: int | None = None
        for attempt in range(1, MAX_ATTEMPTS + 1):
            product, row = self._load_row(product_id, row_key)
            last_seen = row.stock

            if qty.value > row.stock:
                raise InsufficientStockError(
                    f"Insufficient stock. Available: {row.stock}, "
                    f"requested: {qty.value}",
                    current_stock=row.stock,
                )

            try:
                self._product_repo.decrement_stock(
                    [StockDecrement(product.id, product.rev, {row.key: qty.value})]
                )
            except RevisionMismatchError:
                logger.info(
                    "Revision conflict on %s/%s (attempt %d of %d)",
                    product_id, row_key, attempt, MAX_ATTEMPTS,
                )
                continue

            return ReservationResult(product.id, row.key, row.stock - qty.value)

        latest = self._latest_stock(product_id, row_key, fallback=last_seen)
        raise StockConflictError(
            f"Could not register the order. Updated stock: {latest} unit(s) available.",
            current_stock=latest,
        )

    # --- Batch ----------------------------------------------------------------

    def reserve_batch(self, items: list[ReservationItem]) -> list[ReservationResult]:
        """Decrement several rows, possibly across products, all or nothing.

        Duplicate (product, row) items are coalesced by summing their
        quantities.  Every item is checked before anything is written, and
        the write is a single transaction with one revision-guarded patch
        per product document.
        """
        if not items:
            raise ValidationError("At least one item is required")

        wanted = self._coalesce(items)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            products = self._load_products({pid for pid, _ in wanted})
            decrements: dict[str, StockDecrement] = {}
            results: list[ReservationResult] = []

            # Phase 1: validate everything against this attempt's snapshots
            for (product_id, row_key), qty in wanted.items():
                product = products.get(product_id)
                row = product.find_row(row_key) if product is not None else None
                if product is None or row is None:
                    raise EntityNotFoundError(
                        f"Product '{product_id}' or row '{row_key}' not found",
                        item=ReservationItem(product_id, row_key, qty),
                    )
                if qty > row.stock:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product.name} / {row.flavor}. "
                        f"Available: {row.stock}, requested: {qty}",
                        current_stock=row.stock,
                        item=ReservationItem(product_id, row_key, qty),
                    )
                decrement = decrements.setdefault(
                    product_id, StockDecrement(product_id, product.rev, {})
                )
                decrement.quantities[row_key] = qty
                results.append(ReservationResult(product_id, row_key, row.stock - qty))

            # Phase 2: one conditional transaction
            try:
                self._product_repo.decrement_stock(list(decrements.values()))
            except RevisionMismatchError:
                logger.info(
                    "Revision conflict on batch of %d item(s) (attempt %d of %d)",
                    len(wanted), attempt, MAX_ATTEMPTS,
                )
                continue

            for result in results:
                logger.info(
                    "Stock of %s/%s updated to %d",
                    result.product_id, result.row_key, result.new_stock,
                )
            return results

        raise StockConflictError(
            "Could not register the order: the stock changed concurrently. "
            "Please review the quantities and try again."
        )

    # --- Internal helpers -----------------------------------------------------

    def _load_row(self, product_id: str, row_key: str) -> tuple[Product, Row]:
        product = self._product_repo.get_with_row(product_id, row_key)
        row = product.find_row(row_key) if product is not None else None
        if product is None or row is None:
            raise EntityNotFoundError("Product or flavor not found")
        return product, row

    def _load_products(self, product_ids: set[str]) -> dict[str, Product]:
        products: dict[str, Product] = {}
        for product_id in sorted(product_ids):
            product = self._product_repo.get_by_id(product_id)
            if product is not None:
                products[product_id] = product
        return products

    def _latest_stock(self, product_id: str, row_key: str, fallback: int | None) -> int:
        """Best-effort re-read after the retry budget is spent."""
        try:
            product = self._product_repo.get_with_row(product_id, row_key)
        except UpstreamError:
            logger.warning(
                "Could not re-read %s/%s after conflicts", product_id, row_key,
                exc_info=True,
            )
            product = None

        row = product.find_row(row_key) if product is not None else None
        if row is not None:
            return row.stock
        return fallback if fallback is not None else 0

    @staticmethod
    def _coalesce(items: list[ReservationItem]) -> dict[tuple[str, str], int]:
        wanted: dict[tuple[str, str], int] = {}
        for item in items:
            _require_identifier(item.product_id, "productId")
            _require_identifier(item.row_key, "rowKey")
            qty = Quantity(item.quantity)
            key = (item.product_id, item.row_key)
            wanted[key] = wanted.get(key, 0) + qty.value
        return wanted


def _require_identifier(value: object, name: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} is required")
