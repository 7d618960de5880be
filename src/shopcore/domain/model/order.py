"""Order aggregate.

An Order is an immutable purchase record that owns its lines. Lines
capture the price of a product item at the moment the cart was converted,
so later catalog price changes never touch existing orders.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.value_objects import Money, require_positive_quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


MAX_SHIPPING_ADDRESS_LENGTH = 100


@dataclass(frozen=True)
class OrderLine:

    id: int
    order_id: str
    product_item_id: int
    quantity: int
    price: Money  # frozen at order-creation time
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def total_price(self) -> Money:
        return self.price * self.quantity

    @property
    def unit_price(self) -> Money:
        return self.price


@dataclass(frozen=True)
class Order:
    """Aggregate root for purchase orders.

    ``lines`` is ``None`` when storage returned the order without its
    lines; ``calculated_total`` then falls back to the stored
    ``order_total``.
    """

    id: str
    user_id: int
    shipping_address: str
    status: OrderStatus
    order_date: datetime
    order_total: Money
    lines: tuple[OrderLine, ...] | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def calculated_total(self) -> Money:
        if not self.lines:
            return self.order_total
        return Money.total(
            (line.total_price for line in self.lines), self.order_total.currency
        )


# ---------------------------------------------------------------------------
# Drafts: what the conversion hands to storage before ids exist
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineDraft:

    product_item_id: int
    quantity: int
    price: Money

    def __post_init__(self) -> None:
        require_positive_quantity(self.quantity)

    @property
    def total_price(self) -> Money:
        return self.price * self.quantity


@dataclass(frozen=True)
class OrderDraft:
    """A validated, priced cart snapshot ready to become an Order.

    Use ``OrderDraft.create()``; it enforces the invariants that must hold
    before storage opens its transaction.
    """

    user_id: int
    cart_id: int
    shipping_address: str
    lines: tuple[OrderLineDraft, ...]

    @staticmethod
    def create(
        user_id: int,
        cart_id: int,
        shipping_address: str,
        lines: list[OrderLineDraft],
    ) -> OrderDraft:
        address = validate_shipping_address(shipping_address)
        if not lines:
            raise ValidationError("Cart is empty")
        return OrderDraft(
            user_id=user_id,
            cart_id=cart_id,
            shipping_address=address,
            lines=tuple(lines),
        )

    @property
    def total(self) -> Money:
        return Money.total(line.total_price for line in self.lines)


def validate_shipping_address(shipping_address: str | None) -> str:
    if not shipping_address or not shipping_address.strip():
        raise ValidationError("Shipping address is required")
    address = shipping_address.strip()
    if len(address) > MAX_SHIPPING_ADDRESS_LENGTH:
        raise ValidationError(
            f"Shipping address cannot exceed {MAX_SHIPPING_ADDRESS_LENGTH} characters"
        )
    return address
