from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from table_order.deps import get_store
from table_order.routers.errors import not_found
from table_order.schemas.notification import Notification, NotificationCreate
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


class NotificationList(BaseModel):
    items: List[Notification]
    unread_count: int


def _listing(store: OrderStore) -> NotificationList:
    return NotificationList(items=store.notifications(), unread_count=store.unread_count())


@router.get("", response_model=NotificationList)
def list_notifications(store: OrderStore = Depends(get_store)):
    return _listing(store)


@router.post("", response_model=Notification, status_code=status.HTTP_201_CREATED)
def create_notification(payload: NotificationCreate, store: OrderStore = Depends(get_store)):
    return store.add_notification(payload)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_notifications(store: OrderStore = Depends(get_store)):
    store.clear_notifications()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/read-all", response_model=NotificationList)
def read_all_notifications(store: OrderStore = Depends(get_store)):
    store.mark_all_notifications_read()
    return _listing(store)


@router.post("/{notification_id}/read", response_model=NotificationList)
def read_notification(notification_id: str, store: OrderStore = Depends(get_store)):
    if not any(entry.id == notification_id for entry in store.notifications()):
        raise not_found("Notification", notification_id)
    store.mark_notification_read(notification_id)
    return _listing(store)
