"""ProductItem: the catalog's sellable unit, with its price and stock.

The catalog belongs to another part of the system; the ordering core only
reads the current price and stock and deducts stock when an order is
placed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from shopcore.domain.exceptions import ConflictError, ValidationError
from shopcore.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductItem:
    """Invariant: ``stock`` is never negative."""

    id: int
    sku: str
    price: Money
    stock: int = 0

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.sku} cannot be negative")

    def has_stock_for(self, quantity: int) -> bool:
        return quantity <= self.stock

    def ensure_stock_for(self, quantity: int) -> None:
        if not self.has_stock_for(quantity):
            raise ConflictError(
                f"Insufficient stock for product item {self.id} ({self.sku}): "
                f"available {self.stock}, required {quantity}"
            )

    def decremented(self, quantity: int) -> ProductItem:
        """Return a copy with *quantity* units deducted."""
        if quantity <= 0:
            raise ValidationError("Stock decrement must be positive")
        self.ensure_stock_for(quantity)
        return replace(self, stock=self.stock - quantity)

    def with_stock(self, stock: int) -> ProductItem:
        return replace(self, stock=stock)
