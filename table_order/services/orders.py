from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, List, Optional

from table_order.core.errors import InvalidStatusTransition, OrderValidationError
from table_order.schemas.analytics import OrderStats
from table_order.schemas.cart import CartItem
from table_order.schemas.order import Order, OrderDraft, OrderEdit, OrderStatus
from table_order.services.cart import cart_total, estimated_time

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.pending: frozenset({OrderStatus.confirmed, OrderStatus.cancelled}),
    OrderStatus.confirmed: frozenset({OrderStatus.preparing}),
    OrderStatus.preparing: frozenset({OrderStatus.ready}),
    OrderStatus.ready: frozenset({OrderStatus.delivered}),
    OrderStatus.delivered: frozenset({OrderStatus.completed}),
    OrderStatus.completed: frozenset(),
    OrderStatus.cancelled: frozenset(),
}

DATE_FILTERS = {"all", "today", "yesterday", "week", "month"}
_SORT_KEYS = {
    "timestamp": lambda order: order.timestamp,
    "total": lambda order: order.total,
    "status": lambda order: order.status.value,
}


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_draft(draft: OrderDraft, cart: List[CartItem], table_number: Optional[int]) -> None:
    if not cart:
        raise OrderValidationError("Cart is empty")
    if not _clean(draft.customer_name):
        raise OrderValidationError("Customer name is required")
    if not _clean(draft.customer_phone):
        raise OrderValidationError("Customer phone is required")
    if not table_number or table_number <= 0:
        raise OrderValidationError("Table number is not set")


def build_order(
    draft: OrderDraft,
    cart: List[CartItem],
    *,
    order_id: str,
    timestamp: datetime,
    table_number: Optional[int],
    restaurant_id: Optional[str] = None,
    zone_id: Optional[str] = None,
    currency: Optional[str] = None,
) -> Order:
    """Build a pending order from a snapshot of the cart.

    Raises OrderValidationError when the cart is empty, the contact
    details are blank or no table number is known.
    """
    resolved_table = draft.table_number or table_number
    validate_draft(draft, cart, resolved_table)

    items = [entry.model_copy(deep=True) for entry in cart]
    return Order(
        id=order_id,
        table_number=resolved_table,
        customer_name=_clean(draft.customer_name),
        customer_phone=_clean(draft.customer_phone),
        customer_email=_clean(draft.customer_email) or None,
        notes=_clean(draft.notes) or None,
        items=items,
        total=cart_total(items),
        status=OrderStatus.pending,
        timestamp=timestamp,
        estimated_time=estimated_time(items),
        payment_method=draft.payment_method,
        payment_status="pending",
        delivery_type=draft.delivery_type,
        priority=draft.priority,
        restaurant_id=restaurant_id,
        zone_id=zone_id,
        currency=currency,
    )


def is_legal_transition(current: OrderStatus, new_status: OrderStatus) -> bool:
    return new_status in ALLOWED_TRANSITIONS[current]


def check_transition(order: Order, new_status: OrderStatus, force: bool = False) -> None:
    if is_legal_transition(order.status, new_status):
        return
    # cancellation is final, even for a forced override
    if not force or order.status == OrderStatus.cancelled:
        raise InvalidStatusTransition(order.id, order.status.value, new_status.value)
    logger.warning(
        "forced status override order_id=%s from=%s to=%s",
        order.id,
        order.status.value,
        new_status.value,
        extra={"order_id": order.id},
    )


def apply_edit(order: Order, edit: OrderEdit) -> Order:
    update: dict = {}
    if edit.items is not None:
        lines_by_id = {line.item_id: line for line in edit.items}
        unknown = set(lines_by_id) - {item.id for item in order.items}
        if unknown:
            raise OrderValidationError(f"Items not in order: {', '.join(sorted(unknown))}")
        items = []
        for item in order.items:
            line = lines_by_id.get(item.id)
            if line is None:
                items.append(item)
                continue
            changes = {"quantity": line.quantity}
            if line.special_instructions is not None:
                changes["special_instructions"] = line.special_instructions
            items.append(item.model_copy(update=changes))
        update["items"] = items
        update["total"] = cart_total(items)
        update["estimated_time"] = estimated_time(items)
    if edit.notes is not None:
        update["notes"] = _clean(edit.notes) or None
    if edit.priority is not None:
        update["priority"] = edit.priority
    return order.model_copy(update=update)


def _start_of_week(day: date) -> date:
    # weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _matches_date(order: Order, date_filter: str, now: datetime) -> bool:
    day = order.timestamp.date()
    today = now.date()
    if date_filter == "today":
        return day == today
    if date_filter == "yesterday":
        return day == today - timedelta(days=1)
    if date_filter == "week":
        start = _start_of_week(today)
        return start <= day <= start + timedelta(days=6)
    if date_filter == "month":
        return day.year == today.year and day.month == today.month
    return True


def _matches_search(order: Order, search: str) -> bool:
    needle = search.lower()
    return (
        needle in order.id.lower()
        or needle in order.customer_name.lower()
        or search in order.customer_phone
        or search in str(order.table_number)
    )


def filter_orders(
    orders: Iterable[Order],
    *,
    now: datetime,
    status: Optional[OrderStatus] = None,
    date_filter: str = "all",
    payment_status: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: str = "timestamp",
    sort_order: str = "desc",
) -> List[Order]:
    if date_filter not in DATE_FILTERS:
        raise OrderValidationError(f"Unknown date filter: {date_filter}")
    if sort_by not in _SORT_KEYS:
        raise OrderValidationError(f"Unknown sort field: {sort_by}")

    result = list(orders)
    if search:
        result = [order for order in result if _matches_search(order, search)]
    if status is not None:
        result = [order for order in result if order.status == status]
    if date_filter != "all":
        result = [order for order in result if _matches_date(order, date_filter, now)]
    if payment_status:
        result = [order for order in result if order.payment_status == payment_status]

    return sorted(result, key=_SORT_KEYS[sort_by], reverse=sort_order != "asc")


def order_stats(orders: Iterable[Order], now: datetime) -> OrderStats:
    orders = list(orders)
    today = now.date()
    today_orders = [order for order in orders if order.timestamp.date() == today]
    completed_today = [order for order in today_orders if order.status == OrderStatus.completed]
    revenue = sum((order.total for order in completed_today), Decimal("0"))
    average = revenue / len(completed_today) if completed_today else Decimal("0")

    return OrderStats(
        today_orders=len(today_orders),
        pending_orders=sum(1 for order in orders if order.status == OrderStatus.pending),
        completed_today=len(completed_today),
        total_revenue=revenue.quantize(Decimal("0.01")),
        average_order_value=average.quantize(Decimal("0.01")),
    )


def day_bounds(day: date) -> tuple[datetime, datetime]:
    return datetime.combine(day, time.min), datetime.combine(day, time.max)
