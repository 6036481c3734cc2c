"""Abstract repository for Product documents.

Defined in the domain layer so the domain never depends on
infrastructure. The concrete implementation talks to the Sanity HTTP API
and lives in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from pexpress.domain.model.product import Product


@dataclass(frozen=True)
class StockDecrement:
    """Conditional decrement of one or more rows of a single product.

    The write must be rejected with ``RevisionMismatchError`` if the
    document's revision is no longer ``revision``.
    """

    product_id: str
    revision: str
    quantities: dict[str, int] = field(default_factory=dict)  # row key -> qty


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a full product snapshot with all rows, or None."""

    @abstractmethod
    def get_with_row(self, product_id: str, row_key: str) -> Product | None:
        """Return a product snapshot holding only the addressed row.

        Returns None if the product does not exist; the snapshot has no
        rows if the product exists but the row does not.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by name."""

    @abstractmethod
    def decrement_stock(self, decrements: list[StockDecrement]) -> None:
        """Apply every decrement atomically, or none of them.

        Raises RevisionMismatchError on a revision conflict and
        UpstreamError on any other store failure.
        """

    def close(self) -> None:
        """Release any connection held by the repository."""
