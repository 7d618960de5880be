"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. All JSON repositories
built here share one JsonStore, which is what lets the cart-to-order
conversion commit carts, orders and stock together.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.application.cart_service import CartService
from shopcore.application.catalog_service import CatalogService
from shopcore.application.order_service import OrderService
from shopcore.application.payment_service import PaymentService
from shopcore.infrastructure.config import Settings
from shopcore.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shopcore.infrastructure.persistence.json_order_repository import JsonOrderRepository
from shopcore.infrastructure.persistence.json_payment_repository import (
    JsonPaymentRepository,
)
from shopcore.infrastructure.persistence.json_product_item_repository import (
    JsonProductItemRepository,
)
from shopcore.infrastructure.persistence.json_store import JsonStore


@dataclass(frozen=True)
class Container:

    cart_service: CartService
    order_service: OrderService
    payment_service: PaymentService
    catalog_service: CatalogService


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings.from_env()
    store = JsonStore(settings.store_path)

    product_items = JsonProductItemRepository(store)
    carts = JsonCartRepository(store, product_items)
    orders = JsonOrderRepository(store, carts, product_items)
    payments = JsonPaymentRepository(store)

    return Container(
        cart_service=CartService(carts),
        order_service=OrderService(orders, carts, product_items),
        payment_service=PaymentService(payments, orders),
        catalog_service=CatalogService(product_items),
    )
