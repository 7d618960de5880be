"""Pagination/filter validation applied before any list query reaches storage."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.order_status import OrderStatus
from shopcore.domain.model.pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_ORDER,
    MAX_PAGE_SIZE,
    SORT_ORDERS,
    OrderFilter,
)


def validate_order_filter(order_filter: OrderFilter) -> OrderFilter:
    """Return a normalized copy of *order_filter*, or raise ValidationError.

    Checks run in a fixed order and stop at the first failure: page,
    page size, then date range. The argument is never modified.
    """
    page = DEFAULT_PAGE if order_filter.page is None else order_filter.page
    page_size = DEFAULT_PAGE_SIZE if order_filter.page_size is None else order_filter.page_size
    sort_order = (order_filter.sort_order or DEFAULT_SORT_ORDER).lower()

    if page < 1:
        raise ValidationError("Page must be greater than 0")

    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValidationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")

    start, end = _as_utc(order_filter.start_date), _as_utc(order_filter.end_date)
    if start is not None and end is not None and start > end:
        raise ValidationError("Start date cannot be after end date")

    if sort_order not in SORT_ORDERS:
        raise ValidationError(
            f"Sort order must be one of {', '.join(SORT_ORDERS)}, got {order_filter.sort_order!r}"
        )

    status = order_filter.status
    if status is not None:
        status = OrderStatus.parse(status)

    return replace(
        order_filter,
        status=status,
        page=page,
        page_size=page_size,
        sort_order=sort_order,
        start_date=start,
        end_date=end,
    )


def _as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
