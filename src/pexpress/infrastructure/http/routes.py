"""Stock endpoints.

The repository is resolved per request through ``get_product_repository``
so tests can swap it with ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Iterator

from fastapi import APIRouter, Depends, Request, Response, status

from pexpress.application.dto import ReserveItemSpec
from pexpress.application.list_catalog import ListCatalogHandler
from pexpress.application.reserve_batch import ReserveBatchHandler
from pexpress.application.reserve_stock import ReserveStockHandler
from pexpress.domain.repository.product_repository import ProductRepository
from pexpress.infrastructure.bootstrap import product_repository
from pexpress.infrastructure.http.schemas import (
    BatchReservationRequest,
    UpdateStockRequest,
)

router = APIRouter()


def get_product_repository(request: Request) -> Iterator[ProductRepository]:
    repo = product_repository(request.app.state.config)
    try:
        yield repo
    finally:
        repo.close()


@router.options("/update-stock", status_code=status.HTTP_204_NO_CONTENT)
@router.options("/reservar-lote", status_code=status.HTTP_204_NO_CONTENT)
def preflight() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/update-stock")
def update_stock(
    payload: UpdateStockRequest,
    repo: ProductRepository = Depends(get_product_repository),
) -> dict:
    """Decrement one row's stock; responds with the stock left."""
    handler = ReserveStockHandler(product_repo=repo)
    dto = handler.handle(
        ReserveItemSpec(
            product_id=payload.productId,
            row_key=payload.rowKey,
            quantity=payload.quantity,
        )
    )
    return {"newStock": dto.new_stock}


@router.post("/reservar-lote")
def reserve_batch(
    payload: BatchReservationRequest,
    repo: ProductRepository = Depends(get_product_repository),
) -> dict:
    """Decrement every row of an order at once, or none of them."""
    handler = ReserveBatchHandler(product_repo=repo)
    levels = handler.handle(
        [
            ReserveItemSpec(product_id=i.productId, row_key=i.rowKey, quantity=i.qty)
            for i in payload.items
        ]
    )
    return {
        "ok": True,
        "items": [
            {
                "productId": level.product_id,
                "rowKey": level.row_key,
                "newStock": level.new_stock,
            }
            for level in levels
        ],
    }


@router.get("/products")
def list_products(repo: ProductRepository = Depends(get_product_repository)) -> list:
    handler = ListCatalogHandler(product_repo=repo)
    return [
        {
            "id": p.id,
            "name": p.name,
            "rows": [{"key": r.key, "flavor": r.flavor, "stock": r.stock} for r in p.rows],
        }
        for p in handler.handle()
    ]
