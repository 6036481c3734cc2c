"""Integration tests for the ReserveStock use case."""

import pytest

from pexpress.application.dto import ReserveItemSpec
from pexpress.application.reserve_stock import ReserveStockHandler
from pexpress.domain.exceptions import InsufficientStockError
from tests.fakes import FakeProductRepository


def _setup():
    repo = FakeProductRepository()
    repo.add_product("P1", "Pod", [("R1", "Mint", 10)])
    return repo


class TestReserveStock:

    def test_returns_stock_level(self):
        repo = _setup()
        dto = ReserveStockHandler(repo).handle(ReserveItemSpec("P1", "R1", 4))

        assert dto.product_id == "P1"
        assert dto.row_key == "R1"
        assert dto.new_stock == 6

    def test_insufficient_stock_propagates(self):
        repo = _setup()
        with pytest.raises(InsufficientStockError):
            ReserveStockHandler(repo).handle(ReserveItemSpec("P1", "R1", 11))
