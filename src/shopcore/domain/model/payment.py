"""Payment aggregate and its state machine.

A Payment settles exactly one order but has its own lifecycle:

    PENDING -> PAID
    PENDING -> FAILED

Both outcomes are terminal. Transitions return a new Payment; nothing
else may change ``status`` or ``paid_at``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PaymentStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Payment:

    payment_id: str
    order_id: str
    amount: Money
    status: PaymentStatus = PaymentStatus.PENDING
    processor_reference: str | None = None
    paid_at: datetime | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def currency(self) -> str:
        return self.amount.currency

    # --- Queries --------------------------------------------------------------

    def is_paid(self) -> bool:
        return self.status == PaymentStatus.PAID

    def is_failed(self) -> bool:
        return self.status == PaymentStatus.FAILED

    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    def is_processed(self) -> bool:
        return self.status in (PaymentStatus.PAID, PaymentStatus.FAILED)

    def can_be_processed(self) -> bool:
        return self.is_pending() and self.amount.is_positive

    def validate_for_processing(self) -> None:
        if not self.can_be_processed():
            raise ValidationError(
                f"Payment {self.payment_id} cannot be processed: status is "
                f"{self.status.value} or invalid amount {self.amount.amount}"
            )

    # --- Transitions ----------------------------------------------------------

    def mark_as_paid(
        self,
        paid_at: datetime | None = None,
        processor_reference: str | None = None,
    ) -> Payment:
        self.validate_for_processing()
        now = _now()
        return replace(
            self,
            status=PaymentStatus.PAID,
            paid_at=paid_at or now,
            processor_reference=processor_reference or self.processor_reference,
            updated_at=now,
        )

    def mark_as_failed(self, processor_reference: str | None = None) -> Payment:
        self.validate_for_processing()
        now = _now()
        return replace(
            self,
            status=PaymentStatus.FAILED,
            paid_at=now,
            processor_reference=processor_reference or self.processor_reference,
            updated_at=now,
        )
