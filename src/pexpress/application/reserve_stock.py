"""Application service: Reserve Stock use case.

Decrements a single flavor row when the clerk registers an order.
"""

from __future__ import annotations

from pexpress.application.dto import ReserveItemSpec, StockLevelDTO
from pexpress.domain.repository.product_repository import ProductRepository
from pexpress.domain.service.stock_reservation_service import (
    StockReservationService,
)


class ReserveStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, spec: ReserveItemSpec) -> StockLevelDTO:
        svc = StockReservationService(self._product_repo)
        result = svc.reserve(spec.product_id, spec.row_key, spec.quantity)
        return StockLevelDTO(
            product_id=result.product_id,
            row_key=result.row_key,
            new_stock=result.new_stock,
        )
