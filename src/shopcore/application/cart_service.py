"""Application service: shopping cart use cases.

Owns the rules a cart mutation must satisfy before storage is touched:
quantities are positive, and a cart line can only be changed by the user
whose cart it sits in. Stock and product existence are checked by the
storage collaborator and its failures are passed through unchanged.
"""

from __future__ import annotations

import structlog

from shopcore.domain.exceptions import AuthorizationError, NotFoundError
from shopcore.domain.model.cart import ShoppingCart, ShoppingCartItem
from shopcore.domain.model.value_objects import require_positive_quantity
from shopcore.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class CartService:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    # --- Queries --------------------------------------------------------------

    def get_cart(self, user_id: int) -> ShoppingCart | None:
        return self._cart_repo.find_by_user_id(user_id)

    # --- Commands -------------------------------------------------------------

    def add_item(self, user_id: int, product_item_id: int, quantity: int) -> ShoppingCartItem:
        require_positive_quantity(quantity)

        item = self._cart_repo.add_item(user_id, product_item_id, quantity)
        logger.info(
            "Added item to cart",
            user_id=user_id,
            cart_id=item.cart_id,
            product_item_id=product_item_id,
            quantity=item.quantity,
        )
        return item

    def update_item_quantity(
        self, user_id: int, cart_item_id: int, quantity: int
    ) -> ShoppingCartItem:
        require_positive_quantity(quantity)
        self._owned_item(user_id, cart_item_id)

        item = self._cart_repo.update_item_quantity(cart_item_id, quantity)
        logger.info(
            "Updated cart item quantity",
            user_id=user_id,
            cart_item_id=cart_item_id,
            quantity=quantity,
        )
        return item

    def remove_item(self, user_id: int, cart_item_id: int) -> None:
        self._owned_item(user_id, cart_item_id)
        self._cart_repo.remove_item(cart_item_id)
        logger.info("Removed item from cart", user_id=user_id, cart_item_id=cart_item_id)

    def clear_cart(self, user_id: int) -> None:
        cart = self._cart_repo.find_by_user_id(user_id)
        if cart is None:
            raise NotFoundError(f"User {user_id} does not have a cart")

        self._cart_repo.clear_cart(user_id)
        logger.info("Cleared cart", user_id=user_id, cart_id=cart.id)

    # --- Internal helpers -----------------------------------------------------

    def _owned_item(self, user_id: int, cart_item_id: int) -> ShoppingCartItem:
        """Load a cart line and prove it sits in *user_id*'s own cart.

        Ownership is decided by the cart loaded for the user, never by a
        cart id the caller could have supplied.
        """
        item = self._cart_repo.find_cart_item_by_id(cart_item_id)
        if item is None:
            raise NotFoundError(f"Cart item {cart_item_id} not found")

        cart = self._cart_repo.find_by_user_id(user_id)
        if cart is None or cart.id != item.cart_id:
            logger.warning(
                "Rejected cart item access",
                user_id=user_id,
                cart_item_id=cart_item_id,
            )
            raise AuthorizationError(
                f"Cart item {cart_item_id} does not belong to user {user_id}"
            )
        return item
