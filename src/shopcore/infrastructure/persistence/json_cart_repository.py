"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from datetime import datetime, timezone

from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.cart import ShoppingCart, ShoppingCartItem
from shopcore.domain.repository.cart_repository import CartRepository
from shopcore.infrastructure.persistence.json_product_item_repository import (
    JsonProductItemRepository,
)
from shopcore.infrastructure.persistence.json_store import JsonStore, next_id


class JsonCartRepository(CartRepository):

    def __init__(self, store: JsonStore, product_items: JsonProductItemRepository) -> None:
        self._store = store
        self._product_items = product_items

    # --- CartRepository interface ---------------------------------------------

    def find_by_user_id(self, user_id: int) -> ShoppingCart | None:
        with self._store.transaction() as doc:
            raw = self._find_cart_raw(doc, user_id)
            if raw is None:
                return None
            return self._to_domain(raw, self._items_of(doc, raw["id"]))

    def create_for_user(self, user_id: int) -> ShoppingCart:
        with self._store.transaction() as doc:
            existing = self._find_cart_raw(doc, user_id)
            if existing is not None:
                return self._to_domain(existing, self._items_of(doc, existing["id"]))

            now = datetime.now(timezone.utc).isoformat()
            raw = {
                "id": next_id(doc, "cart"),
                "user_id": user_id,
                "created_at": now,
                "updated_at": now,
            }
            doc["carts"].append(raw)
            return self._to_domain(raw, [])

    def add_item(self, user_id: int, product_item_id: int, quantity: int) -> ShoppingCartItem:
        with self._store.transaction() as doc:
            product_item = self._product_items.get_by_id(product_item_id)
            if product_item is None:
                raise NotFoundError(f"Product item {product_item_id} not found")

            cart = self.create_for_user(user_id)
            now = datetime.now(timezone.utc).isoformat()

            # Unique (cart_id, product_item_id): merge into the existing line.
            raw = self._find_item_raw_by_product(doc, cart.id, product_item_id)
            if raw is not None:
                new_quantity = raw["quantity"] + quantity
                product_item.ensure_stock_for(new_quantity)
                raw["quantity"] = new_quantity
                raw["updated_at"] = now
            else:
                product_item.ensure_stock_for(quantity)
                raw = {
                    "id": next_id(doc, "cart_item"),
                    "cart_id": cart.id,
                    "product_item_id": product_item_id,
                    "quantity": quantity,
                    "created_at": now,
                    "updated_at": now,
                }
                doc["cart_items"].append(raw)

            self._touch_cart(doc, cart.id, now)
            return self._item_to_domain(raw)

    def remove_item(self, cart_item_id: int) -> None:
        with self._store.transaction() as doc:
            raw = self._find_item_raw(doc, cart_item_id)
            if raw is None:
                raise NotFoundError(f"Cart item {cart_item_id} not found")
            doc["cart_items"].remove(raw)
            self._touch_cart(doc, raw["cart_id"], datetime.now(timezone.utc).isoformat())

    def update_item_quantity(self, cart_item_id: int, quantity: int) -> ShoppingCartItem:
        with self._store.transaction() as doc:
            raw = self._find_item_raw(doc, cart_item_id)
            if raw is None:
                raise NotFoundError(f"Cart item {cart_item_id} not found")
            now = datetime.now(timezone.utc).isoformat()
            raw["quantity"] = quantity
            raw["updated_at"] = now
            self._touch_cart(doc, raw["cart_id"], now)
            return self._item_to_domain(raw)

    def clear_cart(self, user_id: int) -> None:
        with self._store.transaction() as doc:
            cart = self._find_cart_raw(doc, user_id)
            if cart is None:
                return
            doc["cart_items"] = [
                raw for raw in doc["cart_items"] if raw["cart_id"] != cart["id"]
            ]
            self._touch_cart(doc, cart["id"], datetime.now(timezone.utc).isoformat())

    def find_cart_item_by_id(self, cart_item_id: int) -> ShoppingCartItem | None:
        with self._store.transaction() as doc:
            raw = self._find_item_raw(doc, cart_item_id)
            return self._item_to_domain(raw) if raw is not None else None

    def find_cart_item_by_product_item(
        self, cart_id: int, product_item_id: int
    ) -> ShoppingCartItem | None:
        with self._store.transaction() as doc:
            raw = self._find_item_raw_by_product(doc, cart_id, product_item_id)
            return self._item_to_domain(raw) if raw is not None else None

    # --- Lookup helpers -------------------------------------------------------

    @staticmethod
    def _find_cart_raw(doc: dict, user_id: int) -> dict | None:
        for raw in doc["carts"]:
            if raw["user_id"] == user_id:
                return raw
        return None

    @staticmethod
    def _find_item_raw(doc: dict, cart_item_id: int) -> dict | None:
        for raw in doc["cart_items"]:
            if raw["id"] == cart_item_id:
                return raw
        return None

    @staticmethod
    def _find_item_raw_by_product(doc: dict, cart_id: int, product_item_id: int) -> dict | None:
        for raw in doc["cart_items"]:
            if raw["cart_id"] == cart_id and raw["product_item_id"] == product_item_id:
                return raw
        return None

    @staticmethod
    def _items_of(doc: dict, cart_id: int) -> list[dict]:
        return sorted(
            (raw for raw in doc["cart_items"] if raw["cart_id"] == cart_id),
            key=lambda raw: raw["id"],
        )

    @staticmethod
    def _touch_cart(doc: dict, cart_id: int, now: str) -> None:
        for raw in doc["carts"]:
            if raw["id"] == cart_id:
                raw["updated_at"] = now
                return

    # --- Serialization --------------------------------------------------------

    @classmethod
    def _to_domain(cls, raw: dict, items: list[dict]) -> ShoppingCart:
        return ShoppingCart(
            id=raw["id"],
            user_id=raw["user_id"],
            items=tuple(cls._item_to_domain(i) for i in items),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    @staticmethod
    def _item_to_domain(raw: dict) -> ShoppingCartItem:
        return ShoppingCartItem(
            id=raw["id"],
            cart_id=raw["cart_id"],
            product_item_id=raw["product_item_id"],
            quantity=raw["quantity"],
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
