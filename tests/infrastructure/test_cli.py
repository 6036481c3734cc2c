"""Tests for the click CLI."""

import pytest
from click.testing import CliRunner

from pexpress.infrastructure.cli import product_commands, stock_commands
from pexpress.infrastructure.cli.main import cli
from tests.fakes import FakeProductRepository


@pytest.fixture
def repo(monkeypatch):
    repo = FakeProductRepository()
    repo.add_product("P1", "Pod", [("R1", "Mint", 10)])
    monkeypatch.setattr(stock_commands, "product_repository", lambda: repo)
    monkeypatch.setattr(product_commands, "product_repository", lambda: repo)
    return repo


class TestStockReserve:

    def test_reserve(self, repo):
        result = CliRunner().invoke(
            cli, ["stock", "reserve", "--product", "P1", "--row", "R1", "--quantity", "3"]
        )

        assert result.exit_code == 0, result.output
        assert "7 left" in result.output
        assert repo.stock_of("P1", "R1") == 7

    def test_insufficient_stock(self, repo):
        result = CliRunner().invoke(
            cli, ["stock", "reserve", "--product", "P1", "--row", "R1", "--quantity", "30"]
        )

        assert result.exit_code == 1
        assert "Insufficient stock" in result.output

    def test_zero_quantity(self, repo):
        result = CliRunner().invoke(
            cli, ["stock", "reserve", "--product", "P1", "--row", "R1", "--quantity", "0"]
        )
        assert result.exit_code == 1
        assert repo.reads == 0

    def test_repository_closed(self, repo):
        CliRunner().invoke(
            cli, ["stock", "reserve", "--product", "P1", "--row", "R1", "--quantity", "1"]
        )
        assert repo.closed

    def test_repository_closed_on_error(self, repo):
        result = CliRunner().invoke(
            cli, ["stock", "reserve", "--product", "P1", "--row", "R1", "--quantity", "30"]
        )
        assert result.exit_code == 1
        assert repo.closed


class TestProductList:

    def test_lists_rows(self, repo):
        result = CliRunner().invoke(cli, ["product", "list"])

        assert result.exit_code == 0
        assert "Pod" in result.output
        assert "Mint" in result.output
        assert "10" in result.output

    def test_repository_closed(self, repo):
        CliRunner().invoke(cli, ["product", "list"])
        assert repo.closed

    def test_empty(self, monkeypatch):
        monkeypatch.setattr(
            product_commands, "product_repository", lambda: FakeProductRepository()
        )
        result = CliRunner().invoke(cli, ["product", "list"])
        assert "No products found." in result.output


def test_missing_configuration(monkeypatch, tmp_path):
    for name in ("SANITY_PROJECT_ID", "SANITY_STUDIO_PROJECT_ID", "SANITY_WRITE_TOKEN"):
        monkeypatch.setenv(name, "")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["product", "list"])

    assert result.exit_code == 1
    assert "Missing Sanity configuration" in result.output
