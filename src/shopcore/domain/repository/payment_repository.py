"""Abstract repository for the Payment aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.payment import Payment, PaymentStatus


class PaymentRepository(ABC):

    @abstractmethod
    def create_payment(self, payment: Payment) -> Payment:
        """Persist a new payment."""

    @abstractmethod
    def get_payment(self, payment_id: str) -> Payment | None:
        """Return a payment by its ID, or None."""

    @abstractmethod
    def find_by_order_id(self, order_id: str) -> Payment | None:
        """Return the payment recorded for an order, or None."""

    @abstractmethod
    def update_payment(
        self,
        payment: Payment,
        expected_status: PaymentStatus | None = None,
    ) -> Payment:
        """Replace the stored payment with *payment*.

        When *expected_status* is given, the replacement only happens if the
        stored payment is still in that status; otherwise ValidationError.
        The check and the write are one atomic step.
        """
