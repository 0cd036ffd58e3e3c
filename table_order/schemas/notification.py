from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

NotificationType = Literal["order", "payment", "system", "promotion", "review"]
NotificationPriority = Literal["low", "medium", "high", "urgent"]


class NotificationCreate(BaseModel):
    type: NotificationType = "system"
    title: str
    message: str
    order_id: Optional[str] = None
    priority: NotificationPriority = "medium"


class Notification(NotificationCreate):
    id: str
    timestamp: datetime
    read: bool = False
    restaurant_id: Optional[str] = None
