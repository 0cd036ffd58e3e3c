from __future__ import annotations

from typing import Optional

from table_order.schemas.order import Order, OrderStatus

ORDER_PLACED = "order.placed"
ORDER_STATUS_CHANGED = "order.status.changed"
ORDER_CANCELLED = "order.cancelled"
ORDER_UPDATED = "order.updated"
ORDER_REVIEWED = "order.reviewed"


def short_id(order_id: str) -> str:
    return order_id[-4:]


def build_order_payload(order: Order, previous_status: Optional[OrderStatus] = None) -> dict:
    return {
        "order_id": order.id,
        "short_id": short_id(order.id),
        "table_number": order.table_number,
        "status": order.status.value,
        "previous_status": previous_status.value if previous_status else None,
        "customer_name": order.customer_name,
        "total": str(order.total),
        "estimated_time": order.estimated_time,
        "restaurant_id": order.restaurant_id,
        "delivery_type": order.delivery_type,
    }


def order_placed_events(order: Order) -> list[tuple[str, dict]]:
    return [(ORDER_PLACED, build_order_payload(order))]


def order_status_events(order: Order, previous_status: OrderStatus) -> list[tuple[str, dict]]:
    if previous_status == order.status:
        return []
    payload = build_order_payload(order, previous_status=previous_status)
    if order.status == OrderStatus.cancelled:
        return [(ORDER_CANCELLED, payload)]
    return [(ORDER_STATUS_CHANGED, payload)]


def order_updated_events(order: Order) -> list[tuple[str, dict]]:
    return [(ORDER_UPDATED, build_order_payload(order))]


def order_reviewed_events(order: Order) -> list[tuple[str, dict]]:
    payload = build_order_payload(order)
    payload["rating"] = order.rating
    return [(ORDER_REVIEWED, payload)]
