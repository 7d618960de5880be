"""JSON-file-backed implementation of PaymentRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shopcore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from shopcore.domain.model.payment import Payment, PaymentStatus
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.payment_repository import PaymentRepository
from shopcore.infrastructure.persistence.json_store import JsonStore


class JsonPaymentRepository(PaymentRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- PaymentRepository interface ------------------------------------------

    def create_payment(self, payment: Payment) -> Payment:
        with self._store.transaction() as doc:
            if self._find_raw(doc, payment.payment_id) is not None:
                raise ConflictError(f"Payment {payment.payment_id} already exists")
            doc["payments"].append(self._to_raw(payment))
            return payment

    def get_payment(self, payment_id: str) -> Payment | None:
        with self._store.transaction() as doc:
            raw = self._find_raw(doc, payment_id)
            return self._to_domain(raw) if raw is not None else None

    def find_by_order_id(self, order_id: str) -> Payment | None:
        with self._store.transaction() as doc:
            for raw in doc["payments"]:
                if raw["order_id"] == order_id:
                    return self._to_domain(raw)
            return None

    def update_payment(
        self,
        payment: Payment,
        expected_status: PaymentStatus | None = None,
    ) -> Payment:
        with self._store.transaction() as doc:
            records = doc["payments"]
            for i, raw in enumerate(records):
                if raw["payment_id"] == payment.payment_id:
                    if expected_status is not None and raw["status"] != expected_status.value:
                        raise ValidationError(
                            f"Payment {payment.payment_id} cannot be processed: "
                            f"status is {raw['status']}"
                        )
                    records[i] = self._to_raw(payment)
                    return payment
            raise NotFoundError(f"Payment {payment.payment_id} not found")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find_raw(doc: dict, payment_id: str) -> dict | None:
        for raw in doc["payments"]:
            if raw["payment_id"] == payment_id:
                return raw
        return None

    @staticmethod
    def _to_raw(payment: Payment) -> dict:
        return {
            "payment_id": payment.payment_id,
            "order_id": payment.order_id,
            "processor_reference": payment.processor_reference,
            "amount": str(payment.amount.amount),
            "currency": payment.amount.currency,
            "status": payment.status.value,
            "paid_at": payment.paid_at.isoformat() if payment.paid_at else None,
            "created_at": payment.created_at.isoformat(),
            "updated_at": payment.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Payment:
        paid_at = raw.get("paid_at")
        return Payment(
            payment_id=raw["payment_id"],
            order_id=raw["order_id"],
            processor_reference=raw.get("processor_reference"),
            amount=Money(Decimal(raw["amount"]), raw.get("currency", "USD")),
            status=PaymentStatus(raw["status"]),
            paid_at=datetime.fromisoformat(paid_at) if paid_at else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
