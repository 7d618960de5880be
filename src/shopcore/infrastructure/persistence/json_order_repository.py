"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from shopcore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from shopcore.domain.model.order import Order, OrderDraft, OrderLine
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.pagination import OrderFilter, Page
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shopcore.infrastructure.persistence.json_product_item_repository import (
    JsonProductItemRepository,
)
from shopcore.infrastructure.persistence.json_store import JsonStore, next_id


class JsonOrderRepository(OrderRepository):

    def __init__(
        self,
        store: JsonStore,
        carts: JsonCartRepository,
        product_items: JsonProductItemRepository,
    ) -> None:
        self._store = store
        self._carts = carts
        self._product_items = product_items

    # --- OrderRepository interface --------------------------------------------

    def create_from_cart(self, draft: OrderDraft) -> Order:
        with self._store.transaction() as doc:
            cart = self._carts.find_by_user_id(draft.user_id)
            if cart is None or cart.id != draft.cart_id:
                raise ConflictError(f"Cart {draft.cart_id} is no longer active")

            in_cart = sorted((i.product_item_id, i.quantity) for i in cart.items)
            in_draft = sorted((l.product_item_id, l.quantity) for l in draft.lines)
            if in_cart != in_draft:
                raise ConflictError(f"Cart {draft.cart_id} changed during checkout")

            # Re-checked under the store lock; raises ConflictError on shortfall.
            for line in draft.lines:
                self._product_items.decrement_stock(line.product_item_id, line.quantity)

            now = datetime.now(timezone.utc).isoformat()
            order_id = str(uuid.uuid4())
            raw = {
                "id": order_id,
                "user_id": draft.user_id,
                "shipping_address": draft.shipping_address,
                "status": OrderStatus.PENDING.value,
                "order_date": now,
                "order_total": str(draft.total.amount),
                "currency": draft.total.currency,
                "created_at": now,
                "updated_at": now,
                "lines": [
                    {
                        "id": next_id(doc, "order_line"),
                        "product_item_id": line.product_item_id,
                        "quantity": line.quantity,
                        "price": str(line.price.amount),
                        "currency": line.price.currency,
                        "created_at": now,
                        "updated_at": now,
                    }
                    for line in draft.lines
                ],
            }
            doc["orders"].append(raw)

            self._carts.clear_cart(draft.user_id)
            return self._to_domain(raw)

    def find_orders(self, order_filter: OrderFilter) -> Page[Order]:
        page = order_filter.page or 1
        page_size = order_filter.page_size or 10

        with self._store.transaction() as doc:
            matches = [
                raw for raw in doc["orders"] if self._matches(raw, order_filter)
            ]

        matches.sort(
            key=lambda raw: datetime.fromisoformat(raw["order_date"]),
            reverse=order_filter.sort_order != "asc",
        )
        offset = order_filter.offset
        data = [self._to_domain(raw) for raw in matches[offset:offset + page_size]]
        return Page.build(data, total_items=len(matches), page=page, page_size=page_size)

    def get_order(self, order_id: str) -> Order | None:
        with self._store.transaction() as doc:
            raw = self._find_raw(doc, order_id)
            return self._to_domain(raw) if raw is not None else None

    def update_status(
        self,
        order_id: str,
        status: OrderStatus,
        expected_status: OrderStatus | None = None,
    ) -> Order:
        with self._store.transaction() as doc:
            raw = self._find_raw(doc, order_id)
            if raw is None:
                raise NotFoundError(f"Order {order_id} not found")
            if expected_status is not None and raw["status"] != expected_status.value:
                raise ValidationError(
                    f"cannot transition from {raw['status']} to {status.value}: "
                    f"order {order_id} is no longer {expected_status.value}"
                )
            raw["status"] = status.value
            raw["updated_at"] = datetime.now(timezone.utc).isoformat()
            return self._to_domain(raw)

    # --- Query helpers --------------------------------------------------------

    @staticmethod
    def _find_raw(doc: dict, order_id: str) -> dict | None:
        for raw in doc["orders"]:
            if raw["id"] == order_id:
                return raw
        return None

    @staticmethod
    def _matches(raw: dict, f: OrderFilter) -> bool:
        if raw["user_id"] != f.user_id:
            return False
        if f.status is not None and raw["status"] != f.status.value:
            return False
        order_date = datetime.fromisoformat(raw["order_date"])
        if f.start_date is not None and order_date < f.start_date:
            return False
        if f.end_date is not None and order_date > f.end_date:
            return False
        return True

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        lines = tuple(
            OrderLine(
                id=line["id"],
                order_id=raw["id"],
                product_item_id=line["product_item_id"],
                quantity=line["quantity"],
                price=Money(Decimal(line["price"]), line.get("currency", currency)),
                created_at=datetime.fromisoformat(line["created_at"]),
                updated_at=datetime.fromisoformat(line["updated_at"]),
            )
            for line in raw.get("lines", [])
        )
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            shipping_address=raw["shipping_address"],
            status=OrderStatus(raw["status"]),
            order_date=datetime.fromisoformat(raw["order_date"]),
            order_total=Money(Decimal(raw["order_total"]), currency),
            lines=lines,
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
