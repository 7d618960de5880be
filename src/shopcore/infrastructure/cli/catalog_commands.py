"""CLI commands for catalog product items."""

from __future__ import annotations

import click

from shopcore.infrastructure.bootstrap import Container
from shopcore.infrastructure.cli.errors import domain_errors


@click.command("add")
@click.option("--sku", required=True, help="Stock keeping unit.")
@click.option("--price", required=True, help="Price (e.g. 25.99).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.pass_obj
def catalog_add(container: Container, sku: str, price: str, stock: int) -> None:
    """Add a product item to the catalog."""
    with domain_errors():
        item = container.catalog_service.add_product_item(sku, price, stock)

    click.echo(f"Product item #{item.id} '{item.sku}' added at {item.price} ({item.stock} in stock)")


@click.command("list")
@click.pass_obj
def catalog_list(container: Container) -> None:
    """List all product items."""
    with domain_errors():
        items = container.catalog_service.list_product_items()

    if not items:
        click.echo("No product items found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<20} {'Price':>10} {'Stock':>7}")
    click.echo("-" * 46)
    for p in items:
        click.echo(f"{p.id:<6} {p.sku:<20} {str(p.price):>10} {p.stock:>7}")


@click.command("set-stock")
@click.option("--id", "product_item_id", required=True, type=int, help="Product item ID.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.pass_obj
def catalog_set_stock(container: Container, product_item_id: int, stock: int) -> None:
    """Set the stock level of a product item."""
    with domain_errors():
        item = container.catalog_service.set_stock(product_item_id, stock)

    click.echo(f"Stock for '{item.sku}' set to {item.stock}")


@click.command("set-price")
@click.option("--id", "product_item_id", required=True, type=int, help="Product item ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
@click.pass_obj
def catalog_set_price(container: Container, product_item_id: int, price: str) -> None:
    """Change a product item's price (existing orders keep theirs)."""
    with domain_errors():
        item = container.catalog_service.update_price(product_item_id, price)

    click.echo(f"Price for '{item.sku}' set to {item.price}")
