"""Application service: payment use cases.

Creating a payment binds a PENDING settlement to one of the caller's
orders. Processing applies the outcome reported by the payment processor
through the Payment state machine, so a payment can only ever leave
PENDING once.
"""

from __future__ import annotations

import uuid
from datetime import datetime

import structlog

from shopcore.domain.exceptions import AuthorizationError, ConflictError, NotFoundError
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.payment import Payment, PaymentStatus
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.domain.repository.payment_repository import PaymentRepository

logger = structlog.get_logger(__name__)


class PaymentService:

    def __init__(
        self,
        payment_repo: PaymentRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._payment_repo = payment_repo
        self._order_repo = order_repo

    def get_payment(self, payment_id: str) -> Payment:
        payment = self._payment_repo.get_payment(payment_id)
        if payment is None:
            raise NotFoundError(f"Payment {payment_id} not found")
        return payment

    def create_for_order(
        self,
        order_id: str,
        user_id: int,
        processor_reference: str | None = None,
    ) -> Payment:
        order = self._order_repo.get_order(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        if order.user_id != user_id:
            raise AuthorizationError(
                f"Access denied: Order {order_id} does not belong to user {user_id}"
            )

        existing = self._payment_repo.find_by_order_id(order_id)
        if existing is not None:
            raise ConflictError(
                f"Order {order_id} already has payment {existing.payment_id}"
            )

        payment = Payment(
            payment_id=str(uuid.uuid4()),
            order_id=order.id,
            amount=order.calculated_total,
            status=PaymentStatus.PENDING,
            processor_reference=processor_reference,
        )
        created = self._payment_repo.create_payment(payment)
        logger.info(
            "Created payment",
            payment_id=created.payment_id,
            order_id=order_id,
            amount=str(created.amount.amount),
            currency=created.currency,
        )
        return created

    def process(
        self,
        payment_id: str,
        succeeded: bool,
        paid_at: datetime | None = None,
        processor_reference: str | None = None,
    ) -> Payment:
        """Record the processor's verdict on a pending payment."""
        payment = self.get_payment(payment_id)

        order = self._order_repo.get_order(payment.order_id)
        if order is not None and order.status != OrderStatus.PENDING:
            raise ConflictError(
                f"Order {order.id} is {order.status.value}; "
                f"only pending orders can be paid"
            )

        if succeeded:
            updated = payment.mark_as_paid(paid_at, processor_reference)
        else:
            updated = payment.mark_as_failed(processor_reference)

        saved = self._payment_repo.update_payment(updated, expected_status=payment.status)
        logger.info(
            "Processed payment",
            payment_id=payment_id,
            order_id=payment.order_id,
            status=saved.status.value,
        )
        return saved
