"""Product aggregate.

Products and their rows are owned by the external document store. The
service only ever holds a snapshot read during a single request, along
with the revision token that snapshot was taken at.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pexpress.domain.model.value_objects import coerce_stock


@dataclass(frozen=True)
class Row:
    """A flavor entry within a product, carrying its own stock count."""

    key: str
    flavor: str
    stock: int = 0

    @staticmethod
    def from_stored(key: str, flavor: str | None, stock: object) -> Row:
        return Row(key=key, flavor=flavor or "", stock=coerce_stock(stock))


@dataclass(frozen=True)
class Product:
    """A snapshot of a product document.

    ``rev`` is opaque; it changes on every mutation of the document and is
    the precondition for conditional writes.  ``rows`` may be a subset of
    the stored rows when the snapshot was projected down to a single key.
    """

    id: str
    name: str
    rev: str
    rows: tuple[Row, ...] = field(default_factory=tuple)

    def find_row(self, key: str) -> Row | None:
        """Rows are addressed by key, never by position."""
        for row in self.rows:
            if row.key == key:
                return row
        return None
