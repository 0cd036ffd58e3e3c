from __future__ import annotations

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status

from table_order.deps import get_store
from table_order.routers.errors import not_found, store_errors
from table_order.schemas.analytics import OrderStats
from table_order.schemas.order import (
    BulkStatusUpdate,
    Order,
    OrderDraft,
    OrderEdit,
    OrderStatus,
    PaymentStatus,
    PaymentUpdate,
    Review,
    ReviewCreate,
    StatusUpdate,
)
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderDraft, store: OrderStore = Depends(get_store)):
    with store_errors():
        return store.place_order(payload)


@router.get("", response_model=List[Order])
def list_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status"),
    date_filter: Literal["all", "today", "yesterday", "week", "month"] = Query("all", alias="date"),
    payment_status: Optional[PaymentStatus] = None,
    search: Optional[str] = None,
    sort_by: Literal["timestamp", "total", "status"] = "timestamp",
    sort_order: Literal["asc", "desc"] = "desc",
    store: OrderStore = Depends(get_store),
):
    with store_errors():
        return store.list_orders(
            status=status_filter,
            date_filter=date_filter,
            payment_status=payment_status,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )


@router.get("/stats", response_model=OrderStats)
def get_order_stats(store: OrderStore = Depends(get_store)):
    return store.order_stats()


@router.post("/bulk-status", response_model=List[Order])
def bulk_update_status(payload: BulkStatusUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        return store.bulk_update_status(payload.order_ids, payload.status, force=payload.force)


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str, store: OrderStore = Depends(get_store)):
    order = store.get_order(order_id)
    if order is None:
        raise not_found("Order", order_id)
    return order


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(order_id: str, payload: StatusUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        order = store.update_status(order_id, payload.status, force=payload.force)
    if order is None:
        raise not_found("Order", order_id)
    return order


@router.post("/{order_id}/cancel", response_model=Order)
def cancel_order(order_id: str, store: OrderStore = Depends(get_store)):
    with store_errors():
        order = store.cancel_order(order_id)
    if order is None:
        raise not_found("Order", order_id)
    return order


@router.patch("/{order_id}", response_model=Order)
def edit_order(order_id: str, payload: OrderEdit, store: OrderStore = Depends(get_store)):
    with store_errors():
        order = store.update_order(order_id, payload)
    if order is None:
        raise not_found("Order", order_id)
    return order


@router.patch("/{order_id}/payment", response_model=Order)
def update_payment(order_id: str, payload: PaymentUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        order = store.update_payment_status(order_id, payload.payment_status)
    if order is None:
        raise not_found("Order", order_id)
    return order


@router.post("/{order_id}/review", response_model=Review, status_code=status.HTTP_201_CREATED)
def review_order(order_id: str, payload: ReviewCreate, store: OrderStore = Depends(get_store)):
    with store_errors():
        review = store.add_review(order_id, payload)
    if review is None:
        raise not_found("Order", order_id)
    return review
