"""Data Transfer Objects: plain containers that cross layer boundaries.

Services return domain entities; the CLI turns them into these flat,
display-ready records so formatting rules live in one place.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.model.cart import ShoppingCart
from shopcore.domain.model.order import Order
from shopcore.domain.model.pagination import Page
from shopcore.domain.model.payment import Payment

_DATE_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class CartItemDTO:

    id: int
    product_item_id: int
    quantity: int


@dataclass(frozen=True)
class CartDTO:

    id: int
    user_id: int
    items: list[CartItemDTO]

    @staticmethod
    def from_domain(cart: ShoppingCart) -> CartDTO:
        return CartDTO(
            id=cart.id,
            user_id=cart.user_id,
            items=[
                CartItemDTO(id=i.id, product_item_id=i.product_item_id, quantity=i.quantity)
                for i in cart.items
            ],
        )


@dataclass(frozen=True)
class OrderLineDTO:

    product_item_id: int
    quantity: int
    unit_price: str  # formatted, e.g. "$25.99"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:

    id: str
    user_id: int
    status: str
    shipping_address: str
    lines: list[OrderLineDTO]
    total: str
    order_date: str

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            status=order.status.value,
            shipping_address=order.shipping_address,
            lines=[
                OrderLineDTO(
                    product_item_id=line.product_item_id,
                    quantity=line.quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.total_price),
                )
                for line in order.lines or ()
            ],
            total=str(order.calculated_total),
            order_date=order.order_date.strftime(_DATE_FORMAT),
        )


@dataclass(frozen=True)
class OrderPageDTO:

    data: list[OrderDTO]
    total_items: int
    total_pages: int
    current_page: int
    has_next_page: bool
    has_previous_page: bool

    @staticmethod
    def from_domain(page: Page[Order]) -> OrderPageDTO:
        return OrderPageDTO(
            data=[OrderDTO.from_domain(o) for o in page.data],
            total_items=page.total_items,
            total_pages=page.total_pages,
            current_page=page.current_page,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )


@dataclass(frozen=True)
class PaymentDTO:

    payment_id: str
    order_id: str
    amount: str
    currency: str
    status: str
    processor_reference: str | None
    paid_at: str | None

    @staticmethod
    def from_domain(payment: Payment) -> PaymentDTO:
        return PaymentDTO(
            payment_id=payment.payment_id,
            order_id=payment.order_id,
            amount=str(payment.amount),
            currency=payment.currency,
            status=payment.status.value,
            processor_reference=payment.processor_reference,
            paid_at=payment.paid_at.strftime(_DATE_FORMAT) if payment.paid_at else None,
        )
