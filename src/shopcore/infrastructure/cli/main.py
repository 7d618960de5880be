import click

from shopcore.infrastructure.bootstrap import build_container
from shopcore.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from shopcore.infrastructure.cli.catalog_commands import (
    catalog_add,
    catalog_list,
    catalog_set_price,
    catalog_set_stock,
)
from shopcore.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from shopcore.infrastructure.cli.payment_commands import (
    payment_create,
    payment_process,
    payment_show,
)
from shopcore.infrastructure.config import Settings
from shopcore.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """shopcore: carts, orders and payments."""
    settings = Settings.from_env()
    configure_logging(settings.log_level, settings.log_format)
    ctx.obj = build_container(settings)


@cli.group()
def cart() -> None:
    """Manage shopping carts."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def payment() -> None:
    """Manage payments."""


@cli.group()
def catalog() -> None:
    """Manage catalog product items."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
payment.add_command(payment_create)
payment.add_command(payment_process)
payment.add_command(payment_show)
catalog.add_command(catalog_add)
catalog.add_command(catalog_list)
catalog.add_command(catalog_set_price)
catalog.add_command(catalog_set_stock)
