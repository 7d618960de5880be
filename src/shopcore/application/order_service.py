"""Application service: order use cases.

Reads are guarded by an ownership check; listing goes through the
pagination validator; the cart-to-order conversion prices the cart
through the domain service and hands the resulting draft to storage,
which applies it in a single transaction.
"""

from __future__ import annotations

import structlog

from shopcore.application.pagination import validate_order_filter
from shopcore.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shopcore.domain.model.order import Order, OrderDraft, validate_shipping_address
from shopcore.domain.model.order_status import OrderStatus, transition
from shopcore.domain.model.pagination import OrderFilter, Page
from shopcore.domain.repository.cart_repository import CartRepository
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.domain.repository.product_item_repository import ProductItemRepository
from shopcore.domain.service.cart_pricing_service import CartPricingService

logger = structlog.get_logger(__name__)


class OrderService:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_item_repo: ProductItemRepository,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._pricing = CartPricingService(product_item_repo)

    # --- Queries --------------------------------------------------------------

    def get_order_details(self, order_id: str, user_id: int) -> Order:
        order = self._order_repo.get_order(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        if order.user_id != user_id:
            logger.warning("Rejected order access", order_id=order_id, user_id=user_id)
            raise AuthorizationError(f"Order {order_id} does not belong to user {user_id}")

        return order

    def list_orders(self, order_filter: OrderFilter) -> Page[Order]:
        normalized = validate_order_filter(order_filter)
        return self._order_repo.find_orders(normalized)

    # --- Commands -------------------------------------------------------------

    def create_from_cart(self, user_id: int, shipping_address: str) -> Order:
        """Convert the user's cart into a pending order.

        Steps:
        1. Validate the shipping address and load a non-empty cart.
        2. Price every line at the current catalog price and check stock.
        3. Let storage create the order and lines, decrement stock and
           clear the cart in one transaction.
        """
        address = validate_shipping_address(shipping_address)

        cart = self._cart_repo.find_by_user_id(user_id)
        if cart is None or cart.is_empty:
            raise ValidationError("Cart is empty")

        try:
            lines = self._pricing.price_cart(cart)
            draft = OrderDraft.create(
                user_id=user_id,
                cart_id=cart.id,
                shipping_address=address,
                lines=lines,
            )
            order = self._order_repo.create_from_cart(draft)
        except ConflictError as exc:
            logger.warning("Order creation rejected", user_id=user_id, reason=str(exc))
            raise

        logger.info(
            "Created order from cart",
            order_id=order.id,
            user_id=user_id,
            cart_id=cart.id,
            line_count=len(order.lines or ()),
            total=str(order.calculated_total.amount),
        )
        return order

    def update_status(self, order_id: str, new_status: OrderStatus | str) -> Order:
        order = self._order_repo.get_order(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")

        status = transition(order.status, new_status)
        # Re-checked against the stored status under the store lock.
        updated = self._order_repo.update_status(
            order_id, status, expected_status=order.status
        )
        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=order.status.value,
            to_status=status.value,
        )
        return updated
