from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from table_order.schemas.notification import Notification, NotificationCreate


def build_notification(
    data: NotificationCreate,
    *,
    notification_id: str,
    timestamp: datetime,
    restaurant_id: Optional[str] = None,
) -> Notification:
    return Notification(
        **data.model_dump(),
        id=notification_id,
        timestamp=timestamp,
        read=False,
        restaurant_id=restaurant_id,
    )


def newest_first(notifications: Iterable[Notification]) -> List[Notification]:
    # reversed() first so ties on timestamp list the later insert first
    return sorted(reversed(list(notifications)), key=lambda entry: entry.timestamp, reverse=True)


def mark_read(notifications: List[Notification], notification_id: str) -> List[Notification]:
    return [
        entry.model_copy(update={"read": True}) if entry.id == notification_id else entry
        for entry in notifications
    ]


def mark_all_read(notifications: List[Notification]) -> List[Notification]:
    return [entry if entry.read else entry.model_copy(update={"read": True}) for entry in notifications]


def unread_count(notifications: Iterable[Notification]) -> int:
    return sum(1 for entry in notifications if not entry.read)
