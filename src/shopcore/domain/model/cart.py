"""ShoppingCart aggregate.

A user has at most one cart. The cart is a plain mutable aggregate from
the user's point of view, but every snapshot handed out by a repository
is immutable: mutations go through the repository and return a fresh
snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ShoppingCartItem:
    """A single line in a cart: which product item, and how many."""

    id: int
    cart_id: int
    product_item_id: int
    quantity: int
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass(frozen=True)
class ShoppingCart:

    id: int
    user_id: int
    items: tuple[ShoppingCartItem, ...] = ()
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def find_item(self, cart_item_id: int) -> ShoppingCartItem | None:
        for item in self.items:
            if item.id == cart_item_id:
                return item
        return None
