import click
import uvicorn

from pexpress.infrastructure.cli.product_commands import product_list
from pexpress.infrastructure.cli.stock_commands import stock_reserve
from pexpress.infrastructure.logging_config import setup_logging


@click.group()
@click.option("--log-level", default="WARNING", show_default=True)
def cli(log_level: str) -> None:
    """pexpress: stock reservations for the order form"""
    setup_logging(log_level)


@cli.group()
def product() -> None:
    """Browse the catalog."""


@cli.group()
def stock() -> None:
    """Manage stock."""


@cli.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8787, type=int, show_default=True)
def serve(host: str, port: int) -> None:
    """Run the HTTP API."""
    uvicorn.run(
        "pexpress.infrastructure.http.app:create_app",
        factory=True,
        host=host,
        port=port,
    )


# Register subcommands
product.add_command(product_list)
stock.add_command(stock_reserve)
