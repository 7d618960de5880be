"""Application service: catalog stock and price maintenance.

The catalog proper lives elsewhere; these use cases exist so product
items can be seeded and restocked for the ordering core.
"""

from __future__ import annotations

from dataclasses import replace

from shopcore.domain.exceptions import NotFoundError, ValidationError
from shopcore.domain.model.product_item import ProductItem
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.product_item_repository import ProductItemRepository


class CatalogService:

    def __init__(self, product_item_repo: ProductItemRepository) -> None:
        self._product_item_repo = product_item_repo

    def list_product_items(self) -> list[ProductItem]:
        return sorted(self._product_item_repo.list_all(), key=lambda p: p.id)

    def add_product_item(self, sku: str, price: str, stock: int = 0) -> ProductItem:
        """Add a new product item; IDs are assigned sequentially."""
        if not sku or not sku.strip():
            raise ValidationError("SKU is required")
        item_price = _positive_price(price)

        existing = self._product_item_repo.list_all()
        if any(p.sku == sku.strip() for p in existing):
            raise ValidationError(f"Product item with SKU '{sku}' already exists")

        next_id = max((p.id for p in existing), default=0) + 1
        item = ProductItem(id=next_id, sku=sku.strip(), price=item_price, stock=stock)
        self._product_item_repo.save(item)
        return item

    def set_stock(self, product_item_id: int, stock: int) -> ProductItem:
        item = self._get(product_item_id)
        updated = item.with_stock(stock)
        self._product_item_repo.save(updated)
        return updated

    def update_price(self, product_item_id: int, new_price: str) -> ProductItem:
        """Change a product item's price.

        Existing orders keep the price they captured at creation time.
        """
        price = _positive_price(new_price)
        updated = replace(self._get(product_item_id), price=price)
        self._product_item_repo.save(updated)
        return updated

    def _get(self, product_item_id: int) -> ProductItem:
        item = self._product_item_repo.get_by_id(product_item_id)
        if item is None:
            raise NotFoundError(f"Product item {product_item_id} not found")
        return item


def _positive_price(value: str) -> Money:
    price = Money.of(value)
    if not price.is_positive:
        raise ValidationError("Product item price must be greater than zero")
    return price
