"""Order status state machine.

    pending -> processing -> shipped -> delivered
    pending | processing -> cancelled

``delivered`` and ``cancelled`` are terminal. The machine is a pure
function; persisting the new status is the caller's job.
"""

from __future__ import annotations

from enum import Enum

from shopcore.domain.exceptions import ValidationError


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self]

    @staticmethod
    def parse(value: str | OrderStatus) -> OrderStatus:
        """Accept an OrderStatus or its (case-insensitive) string value."""
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).strip().lower())
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status {value!r} (expected one of: {allowed})"
            ) from exc


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    return requested in ALLOWED_TRANSITIONS[current]


def transition(current: OrderStatus | str, requested: OrderStatus | str) -> OrderStatus:
    """Return the new status, or raise ValidationError for an illegal move."""
    current = OrderStatus.parse(current)
    requested = OrderStatus.parse(requested)
    if not can_transition(current, requested):
        raise ValidationError(
            f"cannot transition from {current.value} to {requested.value}"
        )
    return requested
