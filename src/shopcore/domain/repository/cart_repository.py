"""Abstract repository for the ShoppingCart aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Implementations must enforce uniqueness of
(cart_id, product_item_id): adding a product item already in the cart
increases that line's quantity instead of creating a second line.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.cart import ShoppingCart, ShoppingCartItem


class CartRepository(ABC):

    @abstractmethod
    def find_by_user_id(self, user_id: int) -> ShoppingCart | None:
        """Return the user's cart with its items, or None."""

    @abstractmethod
    def create_for_user(self, user_id: int) -> ShoppingCart:
        """Create an empty cart for the user."""

    @abstractmethod
    def add_item(self, user_id: int, product_item_id: int, quantity: int) -> ShoppingCartItem:
        """Add *quantity* of a product item, creating the cart if needed.

        Raises NotFoundError for an unknown product item and ConflictError
        when the resulting line quantity exceeds available stock.
        """

    @abstractmethod
    def remove_item(self, cart_item_id: int) -> None:
        """Delete a single cart line."""

    @abstractmethod
    def update_item_quantity(self, cart_item_id: int, quantity: int) -> ShoppingCartItem:
        """Overwrite the quantity of a cart line."""

    @abstractmethod
    def clear_cart(self, user_id: int) -> None:
        """Delete every line of the user's cart in one transaction."""

    @abstractmethod
    def find_cart_item_by_id(self, cart_item_id: int) -> ShoppingCartItem | None:
        """Return a cart line by its ID, or None."""

    @abstractmethod
    def find_cart_item_by_product_item(
        self, cart_id: int, product_item_id: int
    ) -> ShoppingCartItem | None:
        """Return the line for a product item inside a cart, or None."""
