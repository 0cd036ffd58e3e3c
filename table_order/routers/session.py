from __future__ import annotations

from fastapi import APIRouter, Depends

from table_order.deps import get_store
from table_order.routers.errors import store_errors
from table_order.schemas.filters import FilterUpdate, SearchQuery
from table_order.schemas.session import SessionState, TableUpdate, ValueUpdate
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api/session", tags=["session"])


@router.get("", response_model=SessionState)
def get_session(store: OrderStore = Depends(get_store)):
    return store.session()


@router.put("/table", response_model=SessionState)
def set_table(payload: TableUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        store.set_table_number(payload.table_number)
    return store.session()


@router.put("/restaurant", response_model=SessionState)
def set_restaurant(payload: ValueUpdate, store: OrderStore = Depends(get_store)):
    store.set_restaurant(payload.value)
    return store.session()


@router.put("/language", response_model=SessionState)
def set_language(payload: ValueUpdate, store: OrderStore = Depends(get_store)):
    store.set_language(payload.value)
    return store.session()


@router.put("/currency", response_model=SessionState)
def set_currency(payload: ValueUpdate, store: OrderStore = Depends(get_store)):
    store.set_currency(payload.value)
    return store.session()


@router.put("/zone", response_model=SessionState)
def set_zone(payload: ValueUpdate, store: OrderStore = Depends(get_store)):
    store.set_delivery_zone(payload.value)
    return store.session()


@router.post("/theme", response_model=SessionState)
def toggle_theme(store: OrderStore = Depends(get_store)):
    store.toggle_theme()
    return store.session()


@router.put("/search", response_model=SessionState)
def set_search(payload: SearchQuery, store: OrderStore = Depends(get_store)):
    store.set_search_query(payload.query)
    return store.session()


@router.put("/filters", response_model=SessionState)
def set_filters(payload: FilterUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        store.set_filters(payload)
    return store.session()


@router.delete("/filters", response_model=SessionState)
def clear_filters(store: OrderStore = Depends(get_store)):
    store.clear_filters()
    return store.session()
