"""Domain service: Cart Pricing.

Turns the lines of a cart into priced order-line drafts by asking the
catalog for each product item's current price and stock. It lives in the
domain layer because "you cannot order more than is in stock" is a core
business rule, not just orchestration.

Like every pre-transaction check this one is advisory: stock can move
between pricing and commit, so storage re-checks inside the conversion
transaction.
"""

from __future__ import annotations

from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.cart import ShoppingCart
from shopcore.domain.model.order import OrderLineDraft
from shopcore.domain.model.product_item import ProductItem
from shopcore.domain.repository.product_item_repository import ProductItemRepository


class CartPricingService:

    def __init__(self, product_item_repo: ProductItemRepository) -> None:
        self._product_item_repo = product_item_repo

    def price_cart(self, cart: ShoppingCart) -> list[OrderLineDraft]:
        """Return one draft line per cart item, priced at today's catalog price.

        Two phases, so nothing is built unless every line passes:
          Phase 1: load each product item and verify stock.
          Phase 2: freeze the current price into a draft line.
        """
        # Phase 1: load and validate
        resolved: list[tuple[ProductItem, int]] = []
        for item in cart.items:
            product_item = self._product_item_repo.get_by_id(item.product_item_id)
            if product_item is None:
                raise NotFoundError(f"Product item {item.product_item_id} not found")
            product_item.ensure_stock_for(item.quantity)
            resolved.append((product_item, item.quantity))

        # Phase 2: price snapshot
        return [
            OrderLineDraft(
                product_item_id=product_item.id,
                quantity=quantity,
                price=product_item.price,
            )
            for product_item, quantity in resolved
        ]
