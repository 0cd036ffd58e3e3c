"""Pure cart transitions: each function takes the current lines and returns new ones."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List

from table_order.core.config import ESTIMATED_TIME_BUFFER_MINUTES
from table_order.core.errors import OrderValidationError
from table_order.schemas.cart import CartItem
from table_order.schemas.menu import MenuItem


def add_item(cart: List[CartItem], item: MenuItem) -> List[CartItem]:
    for index, entry in enumerate(cart):
        if entry.id == item.id:
            updated = list(cart)
            updated[index] = entry.model_copy(update={"quantity": entry.quantity + 1})
            return updated
    return [*cart, CartItem.from_menu_item(item)]


def update_quantity(cart: List[CartItem], item_id: str, quantity: int) -> List[CartItem]:
    if quantity < 0:
        raise OrderValidationError("Quantity cannot be negative")
    if quantity == 0:
        return remove_item(cart, item_id)
    return [
        entry.model_copy(update={"quantity": quantity}) if entry.id == item_id else entry
        for entry in cart
    ]


def remove_item(cart: List[CartItem], item_id: str) -> List[CartItem]:
    return [entry for entry in cart if entry.id != item_id]


def set_instructions(cart: List[CartItem], item_id: str, instructions: str) -> List[CartItem]:
    return [
        entry.model_copy(update={"special_instructions": instructions}) if entry.id == item_id else entry
        for entry in cart
    ]


def cart_total(lines: Iterable[CartItem]) -> Decimal:
    total = sum((entry.line_total for entry in lines), Decimal("0"))
    return total.quantize(Decimal("0.01"))


def cart_count(lines: Iterable[CartItem]) -> int:
    return sum(entry.quantity for entry in lines)


def estimated_time(lines: Iterable[CartItem], buffer_minutes: int = ESTIMATED_TIME_BUFFER_MINUTES) -> int:
    prep_times = [entry.preparation_time for entry in lines]
    if not prep_times:
        return 0
    return max(prep_times) + buffer_minutes
