"""List-query filter and paginated result shapes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, TypeVar

from shopcore.domain.model.order_status import OrderStatus

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_SORT_ORDER = "desc"
SORT_ORDERS = ("asc", "desc")


@dataclass(frozen=True)
class OrderFilter:
    """Caller-supplied criteria for listing a user's orders.

    Optional fields left as ``None`` are filled in by
    ``validate_order_filter``.
    """

    user_id: int
    status: OrderStatus | None = None
    page: int | None = None
    page_size: int | None = None
    sort_order: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None

    @property
    def offset(self) -> int:
        return ((self.page or DEFAULT_PAGE) - 1) * (self.page_size or DEFAULT_PAGE_SIZE)


@dataclass(frozen=True)
class Page(Generic[T]):

    data: list[T] = field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    current_page: int = DEFAULT_PAGE

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @staticmethod
    def build(data: list[T], total_items: int, page: int, page_size: int) -> Page[T]:
        return Page(
            data=list(data),
            total_items=total_items,
            total_pages=math.ceil(total_items / page_size) if total_items else 0,
            current_page=page,
        )
