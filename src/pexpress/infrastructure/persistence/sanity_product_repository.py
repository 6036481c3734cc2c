"""Sanity-backed implementation of ProductRepository."""

from __future__ import annotations

from pexpress.domain.exceptions import RevisionMismatchError, UpstreamError
from pexpress.domain.model.product import Product, Row
from pexpress.domain.repository.product_repository import (
    ProductRepository,
    StockDecrement,
)
from pexpress.infrastructure.sanity.client import SanityApiError, SanityClient

# Status codes the store uses for a failed ifRevisionID precondition
CONFLICT_STATUSES = frozenset({409, 412})

PRODUCT_QUERY = """*[_type=="product" && _id==$productId][0]{
  _id,
  _rev,
  name,
  rows[]{ _key, flavor, stock }
}"""

SINGLE_ROW_QUERY = """*[_type=="product" && _id==$productId][0]{
  _id,
  _rev,
  name,
  'row': rows[_key==$rowKey][0]{ _key, flavor, stock }
}"""

CATALOG_QUERY = """*[_type=="product"]{
  _id,
  _rev,
  name,
  rows[]{ _key, flavor, stock }
} | order(name asc)"""


class SanityProductRepository(ProductRepository):

    def __init__(self, client: SanityClient) -> None:
        self._client = client

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._query(PRODUCT_QUERY, {"productId": product_id})
        return self._to_domain(raw) if raw else None

    def get_with_row(self, product_id: str, row_key: str) -> Product | None:
        raw = self._query(SINGLE_ROW_QUERY, {"productId": product_id, "rowKey": row_key})
        if not raw:
            return None
        row = raw.get("row")
        return self._to_domain({**raw, "rows": [row] if row else []})

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._query(CATALOG_QUERY, {}) or []]

    def decrement_stock(self, decrements: list[StockDecrement]) -> None:
        mutations = [
            {
                "patch": {
                    "id": d.product_id,
                    "ifRevisionID": d.revision,
                    "dec": {
                        stock_path(key): qty for key, qty in d.quantities.items()
                    },
                }
            }
            for d in decrements
        ]
        try:
            self._client.mutate(mutations)
        except SanityApiError as exc:
            if exc.status_code in CONFLICT_STATUSES:
                raise RevisionMismatchError(str(exc)) from exc
            raise UpstreamError(str(exc), status_code=exc.status_code) from exc

    def close(self) -> None:
        self._client.close()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        rows = tuple(
            Row.from_stored(r["_key"], r.get("flavor"), r.get("stock"))
            for r in raw.get("rows") or []
            if isinstance(r, dict) and r.get("_key")
        )
        return Product(
            id=raw["_id"],
            name=raw.get("name") or "",
            rev=raw.get("_rev") or "",
            rows=rows,
        )

    # --- Query helpers --------------------------------------------------------

    def _query(self, query: str, params: dict):
        try:
            return self._client.query(query, params)
        except SanityApiError as exc:
            raise UpstreamError(str(exc), status_code=exc.status_code) from exc


def stock_path(row_key: str) -> str:
    """Field path of a row's stock, addressed by key rather than index."""
    escaped = row_key.replace('"', '\\"')
    return f'rows[_key=="{escaped}"].stock'
