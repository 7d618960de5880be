"""Integration tests for CartService.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from shopcore.application.cart_service import CartService
from shopcore.domain.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shopcore.domain.model.product_item import ProductItem
from shopcore.domain.model.value_objects import Money
from tests.fakes import FakeCartRepository, FakeProductItemRepository


def _setup() -> tuple[CartService, FakeCartRepository]:
    product_items = FakeProductItemRepository([
        ProductItem(id=123, sku="MUG", price=Money.of("25.99"), stock=10),
        ProductItem(id=456, sku="CAP", price=Money.of("9.50"), stock=3),
    ])
    cart_repo = FakeCartRepository(product_items)
    return CartService(cart_repo), cart_repo


class TestAddItem:

    def test_creates_cart_lazily(self):
        service, _ = _setup()
        assert service.get_cart(1) is None
        item = service.add_item(1, 123, 2)
        cart = service.get_cart(1)
        assert cart is not None
        assert cart.items == (item,)

    def test_same_product_merges_into_one_line(self):
        service, _ = _setup()
        first = service.add_item(1, 123, 2)
        second = service.add_item(1, 123, 3)
        assert second.id == first.id
        assert second.quantity == 5
        assert len(service.get_cart(1).items) == 1

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_non_positive_quantity_never_reaches_storage(self, quantity):
        service, cart_repo = _setup()
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            service.add_item(1, 123, quantity)
        assert cart_repo.calls == []

    def test_unknown_product_item_propagates(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError, match="Product item 999"):
            service.add_item(1, 999, 1)

    def test_stock_exceeded_propagates(self):
        service, _ = _setup()
        service.add_item(1, 456, 2)
        with pytest.raises(ConflictError, match="Insufficient stock"):
            service.add_item(1, 456, 2)


class TestUpdateItemQuantity:

    def test_updates_own_line(self):
        service, _ = _setup()
        item = service.add_item(1, 123, 1)
        updated = service.update_item_quantity(1, item.id, 4)
        assert updated.quantity == 4

    def test_zero_quantity_never_reaches_storage(self):
        service, cart_repo = _setup()
        item = service.add_item(1, 123, 1)
        cart_repo.calls.clear()
        with pytest.raises(ValidationError):
            service.update_item_quantity(1, item.id, 0)
        assert cart_repo.calls == []

    def test_other_users_line_rejected(self):
        service, _ = _setup()
        item = service.add_item(1, 123, 1)
        service.add_item(2, 456, 1)
        with pytest.raises(AuthorizationError, match="does not belong to user 2"):
            service.update_item_quantity(2, item.id, 3)

    def test_user_without_cart_rejected(self):
        service, _ = _setup()
        item = service.add_item(1, 123, 1)
        with pytest.raises(AuthorizationError):
            service.update_item_quantity(2, item.id, 3)

    def test_missing_line(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError, match="Cart item 42 not found"):
            service.update_item_quantity(1, 42, 1)


class TestRemoveAndClear:

    def test_remove_item(self):
        service, _ = _setup()
        item = service.add_item(1, 123, 1)
        service.add_item(1, 456, 1)
        service.remove_item(1, item.id)
        assert [i.product_item_id for i in service.get_cart(1).items] == [456]

    def test_remove_other_users_line_rejected(self):
        service, _ = _setup()
        item = service.add_item(1, 123, 1)
        service.add_item(2, 456, 1)
        with pytest.raises(AuthorizationError):
            service.remove_item(2, item.id)
        assert service.get_cart(1).items[0].id == item.id

    def test_clear_cart(self):
        service, _ = _setup()
        service.add_item(1, 123, 1)
        service.add_item(1, 456, 1)
        service.clear_cart(1)
        assert service.get_cart(1).is_empty

    def test_clear_without_cart(self):
        service, _ = _setup()
        with pytest.raises(NotFoundError, match="User 7 does not have a cart"):
            service.clear_cart(7)
