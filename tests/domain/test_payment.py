"""Unit tests for the Payment state machine."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.payment import Payment, PaymentStatus
from shopcore.domain.model.value_objects import Money


def _make_payment(amount: str = "51.98", status: PaymentStatus = PaymentStatus.PENDING) -> Payment:
    return Payment(
        payment_id="pay-1",
        order_id="order-1",
        amount=Money.of(amount),
        status=status,
    )


class TestMarkAsPaid:

    def test_pending_to_paid(self):
        paid = _make_payment().mark_as_paid()
        assert paid.status == PaymentStatus.PAID
        assert paid.is_paid()
        assert paid.is_processed()
        assert paid.paid_at is not None

    def test_returns_new_object(self):
        payment = _make_payment()
        payment.mark_as_paid()
        assert payment.is_pending()

    def test_uses_supplied_paid_at_and_reference(self):
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        paid = _make_payment().mark_as_paid(paid_at=when, processor_reference="ch_123")
        assert paid.paid_at == when
        assert paid.processor_reference == "ch_123"

    def test_zero_amount_cannot_be_paid(self):
        with pytest.raises(ValidationError, match="cannot be processed"):
            _make_payment(amount="0").mark_as_paid()


class TestMarkAsFailed:

    def test_pending_to_failed(self):
        failed = _make_payment().mark_as_failed("declined")
        assert failed.is_failed()
        assert failed.processor_reference == "declined"


class TestTerminalStates:

    @pytest.mark.parametrize("status", [PaymentStatus.PAID, PaymentStatus.FAILED])
    def test_no_transition_out_of_terminal_state(self, status):
        payment = _make_payment(status=status)
        assert not payment.can_be_processed()
        with pytest.raises(ValidationError, match="status is"):
            payment.mark_as_paid()
        with pytest.raises(ValidationError, match="status is"):
            payment.mark_as_failed()

    def test_currency_comes_from_amount(self):
        payment = Payment("p", "o", Money(Decimal("1.00"), "EUR"))
        assert payment.currency == "EUR"
