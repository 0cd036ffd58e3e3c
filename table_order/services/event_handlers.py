from __future__ import annotations

from typing import Callable, Optional

from table_order.schemas.notification import Notification, NotificationCreate
from table_order.services.event_bus import EventBus
from table_order.services.order_events import (
    ORDER_CANCELLED,
    ORDER_PLACED,
    ORDER_REVIEWED,
    ORDER_STATUS_CHANGED,
    ORDER_UPDATED,
)

Notify = Callable[[NotificationCreate, Optional[str]], Notification]


def handle_order_placed(notify: Notify, payload: dict) -> None:
    notify(
        NotificationCreate(
            type="order",
            title="New Order Received",
            message=f"Order #{payload['short_id']} from Table {payload['table_number']}",
            order_id=payload["order_id"],
            priority="medium",
        ),
        payload["restaurant_id"],
    )


def handle_order_status_changed(notify: Notify, payload: dict) -> None:
    notify(
        NotificationCreate(
            type="order",
            title="Order Status Updated",
            message=f"Order #{payload['short_id']} is now {payload['status']}",
            order_id=payload["order_id"],
            priority="medium",
        ),
        payload["restaurant_id"],
    )


def handle_order_cancelled(notify: Notify, payload: dict) -> None:
    notify(
        NotificationCreate(
            type="order",
            title="Order Cancelled",
            message=f"Order #{payload['short_id']} from Table {payload['table_number']} was cancelled",
            order_id=payload["order_id"],
            priority="high",
        ),
        payload["restaurant_id"],
    )


def handle_order_updated(notify: Notify, payload: dict) -> None:
    notify(
        NotificationCreate(
            type="order",
            title="Order Updated",
            message=f"Order #{payload['short_id']} has been updated successfully.",
            order_id=payload["order_id"],
            priority="medium",
        ),
        payload["restaurant_id"],
    )


def handle_order_reviewed(notify: Notify, payload: dict) -> None:
    notify(
        NotificationCreate(
            type="review",
            title="Review Submitted",
            message="Thank you for your feedback!",
            order_id=payload["order_id"],
            priority="low",
        ),
        payload["restaurant_id"],
    )


def register_notification_handlers(bus: EventBus, notify: Notify) -> None:
    bus.subscribe(ORDER_PLACED, lambda payload: handle_order_placed(notify, payload))
    bus.subscribe(ORDER_STATUS_CHANGED, lambda payload: handle_order_status_changed(notify, payload))
    bus.subscribe(ORDER_CANCELLED, lambda payload: handle_order_cancelled(notify, payload))
    bus.subscribe(ORDER_UPDATED, lambda payload: handle_order_updated(notify, payload))
    bus.subscribe(ORDER_REVIEWED, lambda payload: handle_order_reviewed(notify, payload))
