"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from shopcore.application.dto import OrderDTO, OrderPageDTO
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.pagination import OrderFilter
from shopcore.infrastructure.bootstrap import Container
from shopcore.infrastructure.cli.errors import domain_errors

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"User:     {dto.user_id}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Placed:   {dto.order_date}")
    click.echo()
    click.echo(f"  {'Product item':<14} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*42}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_item_id:<14} {line.quantity:>5} {line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*42}")
    click.echo(f"  {'Order Total':<20} {dto.total:>22}")


@click.command("create")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--address", required=True, help="Shipping address.")
@click.pass_obj
def order_create(container: Container, user_id: int, address: str) -> None:
    """Place an order from the user's cart."""
    with domain_errors():
        order = container.order_service.create_from_cart(user_id, address)

    _display_order(OrderDTO.from_domain(order))


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.option("--user", "user_id", required=True, type=int, help="Requesting user ID.")
@click.pass_obj
def order_show(container: Container, order_id: str, user_id: int) -> None:
    """Show details of one of the user's orders."""
    with domain_errors():
        order = container.order_service.get_order_details(order_id, user_id)

    _display_order(OrderDTO.from_domain(order))


@click.command("list")
@click.option("--user", "user_id", required=True, type=int, help="User ID.")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.option("--page", type=int, default=None, help="Page number (default 1).")
@click.option("--page-size", type=int, default=None, help="Orders per page (default 10).")
@click.option("--sort", "sort_order", type=click.Choice(["asc", "desc"]), default=None)
@click.option("--from", "start_date", type=click.DateTime(), default=None, help="Earliest order date.")
@click.option("--to", "end_date", type=click.DateTime(), default=None, help="Latest order date.")
@click.pass_obj
def order_list(
    container: Container,
    user_id: int,
    status: str | None,
    page: int | None,
    page_size: int | None,
    sort_order: str | None,
    start_date: datetime | None,
    end_date: datetime | None,
) -> None:
    """List a user's orders, one page at a time."""
    order_filter = OrderFilter(
        user_id=user_id,
        status=OrderStatus(status.lower()) if status else None,
        page=page,
        page_size=page_size,
        sort_order=sort_order,
        start_date=start_date,
        end_date=end_date,
    )
    with domain_errors():
        result = OrderPageDTO.from_domain(container.order_service.list_orders(order_filter))

    if not result.data:
        click.echo("No orders found.")
    else:
        click.echo(f"{'Order':<38} {'Status':<11} {'Placed':<21} {'Total':>10}")
        click.echo("-" * 83)
        for dto in result.data:
            click.echo(f"{dto.id:<38} {dto.status:<11} {dto.order_date:<21} {dto.total:>10}")

    click.echo(
        f"Page {result.current_page} of {result.total_pages} "
        f"({result.total_items} orders)"
    )


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option("--to", "new_status", required=True, type=_STATUS_CHOICE, help="New status.")
@click.pass_obj
def order_status(container: Container, order_id: str, new_status: str) -> None:
    """Move an order to a new status."""
    with domain_errors():
        order = container.order_service.update_status(order_id, new_status)

    click.echo(f"Order {order.id} is now {order.status.value}.")
