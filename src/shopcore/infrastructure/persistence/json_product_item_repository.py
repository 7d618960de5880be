"""JSON-file-backed implementation of ProductItemRepository."""

from __future__ import annotations

from decimal import Decimal

from shopcore.domain.exceptions import NotFoundError
from shopcore.domain.model.product_item import ProductItem
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.product_item_repository import ProductItemRepository
from shopcore.infrastructure.persistence.json_store import JsonStore


class JsonProductItemRepository(ProductItemRepository):

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    # --- ProductItemRepository interface --------------------------------------

    def get_by_id(self, product_item_id: int) -> ProductItem | None:
        with self._store.transaction() as doc:
            raw = self._find_raw(doc, product_item_id)
            return self._to_domain(raw) if raw is not None else None

    def list_all(self) -> list[ProductItem]:
        with self._store.transaction() as doc:
            return [self._to_domain(raw) for raw in doc["product_items"]]

    def save(self, item: ProductItem) -> None:
        with self._store.transaction() as doc:
            records = doc["product_items"]
            for i, raw in enumerate(records):
                if raw["id"] == item.id:
                    records[i] = self._to_raw(item)
                    break
            else:
                records.append(self._to_raw(item))

    def decrement_stock(self, product_item_id: int, quantity: int) -> ProductItem:
        with self._store.transaction() as doc:
            raw = self._find_raw(doc, product_item_id)
            if raw is None:
                raise NotFoundError(f"Product item {product_item_id} not found")
            # Check and write happen under the store lock.
            updated = self._to_domain(raw).decremented(quantity)
            raw["stock"] = updated.stock
            return updated

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _find_raw(doc: dict, product_item_id: int) -> dict | None:
        for raw in doc["product_items"]:
            if raw["id"] == product_item_id:
                return raw
        return None

    @staticmethod
    def _to_raw(item: ProductItem) -> dict:
        return {
            "id": item.id,
            "sku": item.sku,
            "price": str(item.price.amount),
            "currency": item.price.currency,
            "stock": item.stock,
        }

    @staticmethod
    def _to_domain(raw: dict) -> ProductItem:
        return ProductItem(
            id=raw["id"],
            sku=raw["sku"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "USD")),
            stock=raw.get("stock", 0),
        )
