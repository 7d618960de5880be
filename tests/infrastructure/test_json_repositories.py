"""Tests for the JSON-file-backed repositories, against a temp directory."""

from datetime import datetime, timedelta, timezone

import pytest

from shopcore.domain.exceptions import ConflictError, NotFoundError, ValidationError
from shopcore.domain.model.order import OrderDraft, OrderLineDraft
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.pagination import OrderFilter
from shopcore.domain.model.payment import Payment, PaymentStatus
from shopcore.domain.model.product_item import ProductItem
from shopcore.domain.model.value_objects import Money
from shopcore.infrastructure.persistence.json_cart_repository import JsonCartRepository
from shopcore.infrastructure.persistence.json_order_repository import JsonOrderRepository
from shopcore.infrastructure.persistence.json_payment_repository import JsonPaymentRepository
from shopcore.infrastructure.persistence.json_product_item_repository import (
    JsonProductItemRepository,
)
from shopcore.infrastructure.persistence.json_store import JsonStore


@pytest.fixture
def repos(tmp_path):
    store = JsonStore(tmp_path / "store.json")
    product_items = JsonProductItemRepository(store)
    carts = JsonCartRepository(store, product_items)
    orders = JsonOrderRepository(store, carts, product_items)
    payments = JsonPaymentRepository(store)
    product_items.save(ProductItem(id=123, sku="MUG", price=Money.of("25.99"), stock=10))
    product_items.save(ProductItem(id=456, sku="CAP", price=Money.of("9.50"), stock=1))
    return carts, orders, payments, product_items


def _draft(carts, user_id: int = 1) -> OrderDraft:
    cart = carts.find_by_user_id(user_id)
    return OrderDraft.create(
        user_id=user_id,
        cart_id=cart.id,
        shipping_address="1 Main St",
        lines=[
            OrderLineDraft(i.product_item_id, i.quantity, Money.of("25.99"))
            for i in cart.items
        ],
    )


class TestJsonProductItemRepository:

    def test_round_trip(self, repos):
        *_, product_items = repos
        item = product_items.get_by_id(123)
        assert item.price == Money.of("25.99")
        assert item.stock == 10

    def test_decrement_stock(self, repos):
        *_, product_items = repos
        assert product_items.decrement_stock(123, 3).stock == 7
        assert product_items.get_by_id(123).stock == 7

    def test_decrement_beyond_stock(self, repos):
        *_, product_items = repos
        with pytest.raises(ConflictError):
            product_items.decrement_stock(456, 2)
        assert product_items.get_by_id(456).stock == 1

    def test_decrement_unknown(self, repos):
        *_, product_items = repos
        with pytest.raises(NotFoundError):
            product_items.decrement_stock(999, 1)


class TestJsonCartRepository:

    def test_add_item_creates_cart_and_merges(self, repos):
        carts, *_ = repos
        first = carts.add_item(1, 123, 2)
        second = carts.add_item(1, 123, 1)
        assert second.id == first.id
        cart = carts.find_by_user_id(1)
        assert [(i.product_item_id, i.quantity) for i in cart.items] == [(123, 3)]
        assert carts.find_cart_item_by_product_item(cart.id, 123).quantity == 3

    def test_add_item_checks_stock_of_merged_line(self, repos):
        carts, *_ = repos
        carts.add_item(1, 456, 1)
        with pytest.raises(ConflictError):
            carts.add_item(1, 456, 1)
        assert carts.find_by_user_id(1).items[0].quantity == 1

    def test_unknown_product_item(self, repos):
        carts, *_ = repos
        with pytest.raises(NotFoundError):
            carts.add_item(1, 999, 1)
        assert carts.find_by_user_id(1) is None

    def test_update_remove_clear(self, repos):
        carts, *_ = repos
        mug = carts.add_item(1, 123, 1)
        cap = carts.add_item(1, 456, 1)
        assert carts.update_item_quantity(mug.id, 5).quantity == 5
        carts.remove_item(cap.id)
        assert carts.find_cart_item_by_id(cap.id) is None
        carts.clear_cart(1)
        assert carts.find_by_user_id(1).is_empty

    def test_missing_line(self, repos):
        carts, *_ = repos
        with pytest.raises(NotFoundError):
            carts.remove_item(42)


class TestJsonOrderRepository:

    def test_create_from_cart(self, repos):
        carts, orders, _, product_items = repos
        carts.add_item(1, 123, 2)

        order = orders.create_from_cart(_draft(carts))

        assert order.status == OrderStatus.PENDING
        assert order.calculated_total == Money.of("51.98")
        assert orders.get_order(order.id) == order
        assert carts.find_by_user_id(1).is_empty
        assert product_items.get_by_id(123).stock == 8

    def test_failed_decrement_rolls_back_everything(self, repos):
        carts, orders, _, product_items = repos
        carts.add_item(1, 123, 2)
        carts.add_item(1, 456, 1)
        draft = _draft(carts)
        # Someone else buys the last CAP after the draft was priced.
        product_items.decrement_stock(456, 1)

        with pytest.raises(ConflictError, match="Insufficient stock"):
            orders.create_from_cart(draft)

        assert len(carts.find_by_user_id(1).items) == 2
        assert product_items.get_by_id(123).stock == 10
        assert orders.find_orders(OrderFilter(user_id=1, page=1, page_size=10)).total_items == 0

    def test_cart_changed_since_draft(self, repos):
        carts, orders, *_ = repos
        carts.add_item(1, 123, 2)
        draft = _draft(carts)
        carts.add_item(1, 123, 1)
        with pytest.raises(ConflictError, match="changed during checkout"):
            orders.create_from_cart(draft)

    def test_find_orders_filters_and_pages(self, repos):
        carts, orders, *_ = repos
        for _ in range(3):
            carts.add_item(1, 123, 1)
            orders.create_from_cart(_draft(carts))
        carts.add_item(2, 123, 1)
        orders.create_from_cart(_draft(carts, user_id=2))

        page = orders.find_orders(OrderFilter(user_id=1, page=1, page_size=2, sort_order="desc"))
        assert page.total_items == 3
        assert page.total_pages == 2
        assert len(page.data) == 2
        assert page.data[0].order_date >= page.data[1].order_date

        future = datetime.now(timezone.utc) + timedelta(days=1)
        later = orders.find_orders(
            OrderFilter(user_id=1, page=1, page_size=10, start_date=future)
        )
        assert later.total_items == 0

    def test_update_status(self, repos):
        carts, orders, *_ = repos
        carts.add_item(1, 123, 1)
        order = orders.create_from_cart(_draft(carts))
        orders.update_status(order.id, OrderStatus.PROCESSING)
        assert orders.get_order(order.id).status == OrderStatus.PROCESSING
        page = orders.find_orders(
            OrderFilter(user_id=1, status=OrderStatus.PENDING, page=1, page_size=10)
        )
        assert page.data == []

    def test_update_status_rechecks_expected_status(self, repos):
        carts, orders, *_ = repos
        carts.add_item(1, 123, 1)
        order = orders.create_from_cart(_draft(carts))
        orders.update_status(order.id, OrderStatus.CANCELLED, expected_status=OrderStatus.PENDING)
        with pytest.raises(ValidationError, match="no longer pending"):
            orders.update_status(
                order.id, OrderStatus.PROCESSING, expected_status=OrderStatus.PENDING
            )
        assert orders.get_order(order.id).status == OrderStatus.CANCELLED

    def test_update_status_missing(self, repos):
        _, orders, *_ = repos
        with pytest.raises(NotFoundError):
            orders.update_status("nope", OrderStatus.PROCESSING)


class TestJsonPaymentRepository:

    def test_create_get_update(self, repos):
        _, _, payments, _ = repos
        payment = Payment(payment_id="p-1", order_id="o-1", amount=Money.of("51.98"))
        payments.create_payment(payment)
        assert payments.get_payment("p-1") == payment
        assert payments.find_by_order_id("o-1") == payment

        paid = payment.mark_as_paid(processor_reference="ch_1")
        payments.update_payment(paid)
        stored = payments.get_payment("p-1")
        assert stored.status == PaymentStatus.PAID
        assert stored.paid_at == paid.paid_at

    def test_update_rechecks_expected_status(self, repos):
        _, _, payments, _ = repos
        payment = Payment(payment_id="p-1", order_id="o-1", amount=Money.of("51.98"))
        payments.create_payment(payment)
        payments.update_payment(payment.mark_as_failed(), expected_status=PaymentStatus.PENDING)
        with pytest.raises(ValidationError, match="status is FAILED"):
            payments.update_payment(payment.mark_as_paid(), expected_status=PaymentStatus.PENDING)
        assert payments.get_payment("p-1").status == PaymentStatus.FAILED

    def test_duplicate_id(self, repos):
        _, _, payments, _ = repos
        payment = Payment(payment_id="p-1", order_id="o-1", amount=Money.of("1.00"))
        payments.create_payment(payment)
        with pytest.raises(ConflictError):
            payments.create_payment(payment)

    def test_update_missing(self, repos):
        _, _, payments, _ = repos
        with pytest.raises(NotFoundError):
            payments.update_payment(Payment(payment_id="x", order_id="o", amount=Money.of("1")))
