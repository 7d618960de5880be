"""Abstract repository for catalog ProductItems (price and stock)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.product_item import ProductItem


class ProductItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_item_id: int) -> ProductItem | None:
        """Return a product item, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[ProductItem]:
        """Return every product item in the catalog."""

    @abstractmethod
    def save(self, item: ProductItem) -> None:
        """Persist a new or updated product item."""

    @abstractmethod
    def decrement_stock(self, product_item_id: int, quantity: int) -> ProductItem:
        """Deduct stock only if enough is available.

        Raises NotFoundError for an unknown item and ConflictError when
        fewer than *quantity* units remain. The check and the write are
        one atomic step.
        """
