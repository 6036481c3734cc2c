"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from pexpress.application.list_catalog import ListCatalogHandler
from pexpress.domain.exceptions import DomainException
from pexpress.infrastructure.bootstrap import product_repository


@click.command("list")
def product_list() -> None:
    """List every product with its flavors and stock."""
    try:
        repo = product_repository()
        try:
            products = ListCatalogHandler(product_repo=repo).handle()
        finally:
            repo.close()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<24} {'Flavor':<20} {'Key':<14} {'Stock':>6}")
    click.echo("-" * 67)
    for p in products:
        if not p.rows:
            click.echo(f"{p.name:<24} {'(no flavors)':<20}")
        for row in p.rows:
            click.echo(f"{p.name:<24} {row.flavor:<20} {row.key:<14} {row.stock:>6}")
