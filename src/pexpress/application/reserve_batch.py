"""Application service: Reserve Batch use case.

Reserves every line of an order in one go.  Either all rows are
decremented or none are.
"""

from __future__ import annotations

from pexpress.application.dto import ReserveItemSpec, StockLevelDTO
from pexpress.domain.model.reservation import ReservationItem
from pexpress.domain.repository.product_repository import ProductRepository
from pexpress.domain.service.stock_reservation_service import (
    StockReservationService,
)


class ReserveBatchHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, specs: list[ReserveItemSpec]) -> list[StockLevelDTO]:
        svc = StockReservationService(self._product_repo)
        results = svc.reserve_batch(
            [ReservationItem(s.product_id, s.row_key, s.quantity) for s in specs]
        )
        return [
            StockLevelDTO(
                product_id=r.product_id,
                row_key=r.row_key,
                new_stock=r.new_stock,
            )
            for r in results
        ]
