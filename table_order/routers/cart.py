from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from table_order.deps import get_store
from table_order.routers.errors import not_found, store_errors
from table_order.schemas.cart import CartAdd, CartView, InstructionsUpdate, QuantityUpdate
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api/cart", tags=["cart"])


def _cart_view(store: OrderStore) -> CartView:
    return CartView(
        items=store.cart(),
        total=store.cart_total(),
        count=store.cart_count(),
        estimated_time=store.cart_estimated_time(),
    )


@router.get("", response_model=CartView)
def get_cart(store: OrderStore = Depends(get_store)):
    return _cart_view(store)


@router.post("/items", response_model=CartView)
def add_cart_item(payload: CartAdd, store: OrderStore = Depends(get_store)):
    item = store.get_menu_item(payload.item_id)
    if item is None:
        raise not_found("Menu item", payload.item_id)
    if not item.available:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{item.name} is not available")
    store.add_to_cart(item)
    return _cart_view(store)


@router.patch("/items/{item_id}", response_model=CartView)
def update_cart_quantity(item_id: str, payload: QuantityUpdate, store: OrderStore = Depends(get_store)):
    with store_errors():
        store.update_quantity(item_id, payload.quantity)
    return _cart_view(store)


@router.put("/items/{item_id}/instructions", response_model=CartView)
def update_cart_instructions(item_id: str, payload: InstructionsUpdate, store: OrderStore = Depends(get_store)):
    store.set_special_instructions(item_id, payload.instructions)
    return _cart_view(store)


@router.delete("/items/{item_id}", response_model=CartView)
def remove_cart_item(item_id: str, store: OrderStore = Depends(get_store)):
    store.remove_from_cart(item_id)
    return _cart_view(store)


@router.delete("", response_model=CartView)
def clear_cart(store: OrderStore = Depends(get_store)):
    store.clear_cart()
    return _cart_view(store)
