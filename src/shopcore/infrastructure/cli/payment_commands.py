"""CLI commands for payments."""

from __future__ import annotations

from datetime import datetime

import click

from shopcore.application.dto import PaymentDTO
from shopcore.infrastructure.bootstrap import Container
from shopcore.infrastructure.cli.errors import domain_errors


def _display_payment(dto: PaymentDTO) -> None:
    click.echo(f"Payment {dto.payment_id}  (status={dto.status})")
    click.echo(f"Order:   {dto.order_id}")
    click.echo(f"Amount:  {dto.amount} {dto.currency}")
    if dto.processor_reference:
        click.echo(f"Ref:     {dto.processor_reference}")
    if dto.paid_at:
        click.echo(f"Settled: {dto.paid_at}")


@click.command("create")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--user", "user_id", required=True, type=int, help="Paying user ID.")
@click.option("--ref", "processor_reference", default=None, help="Processor reference.")
@click.pass_obj
def payment_create(
    container: Container, order_id: str, user_id: int, processor_reference: str | None
) -> None:
    """Open a pending payment for an order."""
    with domain_errors():
        payment = container.payment_service.create_for_order(
            order_id, user_id, processor_reference
        )

    _display_payment(PaymentDTO.from_domain(payment))


@click.command("process")
@click.option("--id", "payment_id", required=True, help="Payment ID.")
@click.option("--succeeded/--failed", default=True, show_default=True, help="Processor outcome.")
@click.option("--at", "paid_at", type=click.DateTime(), default=None, help="Settlement time.")
@click.option("--ref", "processor_reference", default=None, help="Processor reference.")
@click.pass_obj
def payment_process(
    container: Container,
    payment_id: str,
    succeeded: bool,
    paid_at: datetime | None,
    processor_reference: str | None,
) -> None:
    """Record the processor's outcome for a pending payment."""
    with domain_errors():
        payment = container.payment_service.process(
            payment_id, succeeded, paid_at=paid_at, processor_reference=processor_reference
        )

    _display_payment(PaymentDTO.from_domain(payment))


@click.command("show")
@click.option("--id", "payment_id", required=True, help="Payment ID.")
@click.pass_obj
def payment_show(container: Container, payment_id: str) -> None:
    """Show a payment."""
    with domain_errors():
        payment = container.payment_service.get_payment(payment_id)

    _display_payment(PaymentDTO.from_domain(payment))
