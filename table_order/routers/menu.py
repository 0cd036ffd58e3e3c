from __future__ import annotations

from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status

from table_order.deps import get_store
from table_order.routers.errors import not_found, store_errors
from table_order.schemas.filters import MenuSearchResult
from table_order.schemas.menu import Category, MenuItem, MenuItemCreate, MenuItemFields
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api", tags=["menu"])


@router.get("/menu", response_model=MenuSearchResult)
def list_menu(category: Optional[str] = None, store: OrderStore = Depends(get_store)):
    return store.menu(category)


@router.get("/menu/popular", response_model=List[MenuItem])
def list_popular_items(store: OrderStore = Depends(get_store)):
    return store.popular_menu_items()


@router.get("/menu/categories", response_model=List[Category])
def list_categories(store: OrderStore = Depends(get_store)):
    return store.categories()


@router.get("/admin/menu", response_model=List[MenuItem])
def list_admin_menu(
    category: Optional[str] = None,
    query: str = "",
    store: OrderStore = Depends(get_store),
):
    return store.admin_menu(category, query)


@router.get("/admin/menu/stats")
def admin_menu_stats(store: OrderStore = Depends(get_store)) -> Dict[str, Dict[str, int]]:
    return store.category_stats()


@router.post("/admin/menu", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def create_menu_item(payload: MenuItemCreate, store: OrderStore = Depends(get_store)):
    with store_errors():
        return store.add_menu_item(payload)


@router.put("/admin/menu/{item_id}", response_model=MenuItem)
def update_menu_item(item_id: str, payload: MenuItemFields, store: OrderStore = Depends(get_store)):
    updated = store.update_menu_item(MenuItem(id=item_id, **payload.model_dump()))
    if updated is None:
        raise not_found("Menu item", item_id)
    return updated


@router.post("/admin/menu/{item_id}/toggle", response_model=MenuItem)
def toggle_menu_item(item_id: str, store: OrderStore = Depends(get_store)):
    item = store.toggle_menu_item_availability(item_id)
    if item is None:
        raise not_found("Menu item", item_id)
    return item


@router.post("/admin/menu/{item_id}/duplicate", response_model=MenuItem, status_code=status.HTTP_201_CREATED)
def duplicate_menu_item(item_id: str, store: OrderStore = Depends(get_store)):
    item = store.duplicate_menu_item(item_id)
    if item is None:
        raise not_found("Menu item", item_id)
    return item
