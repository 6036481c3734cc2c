"""Integration tests for the ReserveBatch use case."""

from pexpress.application.dto import ReserveItemSpec
from pexpress.application.reserve_batch import ReserveBatchHandler
from tests.fakes import FakeProductRepository


def test_reserves_every_line():
    repo = FakeProductRepository()
    repo.add_product("P1", "Pod", [("R1", "Mint", 10), ("R2", "Grape", 4)])

    levels = ReserveBatchHandler(repo).handle(
        [ReserveItemSpec("P1", "R1", 2), ReserveItemSpec("P1", "R2", 4)]
    )

    assert {(level.row_key, level.new_stock) for level in levels} == {("R1", 8), ("R2", 0)}
