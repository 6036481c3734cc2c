"""CLI commands for stock reservations."""

from __future__ import annotations

import click

from pexpress.application.dto import ReserveItemSpec
from pexpress.application.reserve_stock import ReserveStockHandler
from pexpress.domain.exceptions import DomainException
from pexpress.infrastructure.bootstrap import product_repository


@click.command("reserve")
@click.option("--product", "product_id", required=True, help="Product document ID.")
@click.option("--row", "row_key", required=True, help="Flavor row key.")
@click.option("--quantity", required=True, type=int, help="Units to take from stock.")
def stock_reserve(product_id: str, row_key: str, quantity: int) -> None:
    """Decrement a flavor's stock, as the order form does."""
    try:
        repo = product_repository()
        try:
            handler = ReserveStockHandler(product_repo=repo)
            dto = handler.handle(
                ReserveItemSpec(product_id=product_id, row_key=row_key, quantity=quantity)
            )
        finally:
            repo.close()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reserved {quantity} of {product_id}/{row_key}; {dto.new_stock} left.")
