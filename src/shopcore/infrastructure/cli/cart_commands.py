"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from shopcore.application.dto import CartDTO
from shopcore.infrastructure.bootstrap import Container
from shopcore.infrastructure.cli.errors import domain_errors

_user_option = click.option("--user", "user_id", required=True, type=int, help="User ID.")


@click.command("show")
@_user_option
@click.pass_obj
def cart_show(container: Container, user_id: int) -> None:
    """Show a user's cart."""
    with domain_errors():
        cart = container.cart_service.get_cart(user_id)

    if cart is None or cart.is_empty:
        click.echo(f"Cart for user {user_id} is empty.")
        return

    dto = CartDTO.from_domain(cart)
    click.echo(f"Cart #{dto.id}  (user={dto.user_id})")
    click.echo(f"  {'Line':<6} {'Product item':>12} {'Qty':>5}")
    click.echo(f"  {'-'*25}")
    for item in dto.items:
        click.echo(f"  {item.id:<6} {item.product_item_id:>12} {item.quantity:>5}")


@click.command("add")
@_user_option
@click.option("--item", "product_item_id", required=True, type=int, help="Product item ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="Quantity to add.")
@click.pass_obj
def cart_add(container: Container, user_id: int, product_item_id: int, quantity: int) -> None:
    """Add a product item to a user's cart."""
    with domain_errors():
        item = container.cart_service.add_item(user_id, product_item_id, quantity)

    click.echo(
        f"Cart line #{item.id}: product item {item.product_item_id} x {item.quantity}"
    )


@click.command("update")
@_user_option
@click.option("--line", "cart_item_id", required=True, type=int, help="Cart line ID.")
@click.option("--quantity", required=True, type=int, help="New quantity.")
@click.pass_obj
def cart_update(container: Container, user_id: int, cart_item_id: int, quantity: int) -> None:
    """Change the quantity of a cart line."""
    with domain_errors():
        item = container.cart_service.update_item_quantity(user_id, cart_item_id, quantity)

    click.echo(f"Cart line #{item.id} quantity set to {item.quantity}")


@click.command("remove")
@_user_option
@click.option("--line", "cart_item_id", required=True, type=int, help="Cart line ID.")
@click.pass_obj
def cart_remove(container: Container, user_id: int, cart_item_id: int) -> None:
    """Remove a line from a user's cart."""
    with domain_errors():
        container.cart_service.remove_item(user_id, cart_item_id)

    click.echo(f"Cart line #{cart_item_id} removed.")


@click.command("clear")
@_user_option
@click.pass_obj
def cart_clear(container: Container, user_id: int) -> None:
    """Remove every line from a user's cart."""
    with domain_errors():
        container.cart_service.clear_cart(user_id)

    click.echo(f"Cart for user {user_id} cleared.")
