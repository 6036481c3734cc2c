"""Application service: List Catalog use case (query)."""

from __future__ import annotations

from pexpress.application.dto import ProductDTO, RowDTO
from pexpress.domain.model.product import Product
from pexpress.domain.repository.product_repository import ProductRepository


class ListCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductDTO]:
        return [self._to_dto(p) for p in self._product_repo.list_all()]

    @staticmethod
    def _to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            rows=[
                RowDTO(key=row.key, flavor=row.flavor, stock=row.stock)
                for row in product.rows
            ],
        )
