"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.order import Order, OrderDraft
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.pagination import OrderFilter, Page


class OrderRepository(ABC):

    @abstractmethod
    def create_from_cart(self, draft: OrderDraft) -> Order:
        """Turn a priced cart snapshot into a persisted Order, atomically.

        In one transaction: insert the order and its lines, decrement
        stock for every line (re-checking availability), and clear the
        cart. Any failure, including ConflictError for stock that ran out
        since the draft was priced, leaves all storage untouched.
        """

    @abstractmethod
    def find_orders(self, order_filter: OrderFilter) -> Page[Order]:
        """Return one page of the user's orders matching a validated filter."""

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None:
        """Return an order with its lines, or None if not found."""

    @abstractmethod
    def update_status(
        self,
        order_id: str,
        status: OrderStatus,
        expected_status: OrderStatus | None = None,
    ) -> Order:
        """Persist a new status and return the updated order.

        When *expected_status* is given, the stored status is re-read in the
        same atomic step and a ValidationError is raised if it has moved on.
        """
