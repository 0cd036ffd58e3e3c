"""Typed commands accepted by ``OrderStore.dispatch``.

Each command names the store method it runs; its fields are passed to
that method as keyword arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import ClassVar, List, Union

from table_order.schemas.filters import FilterUpdate
from table_order.schemas.menu import MenuItem, MenuItemCreate
from table_order.schemas.notification import NotificationCreate
from table_order.schemas.order import OrderDraft, OrderEdit, OrderStatus, ReviewCreate


@dataclass(frozen=True)
class Command:
    method: ClassVar[str] = ""


# cart
@dataclass(frozen=True)
class AddToCart(Command):
    method: ClassVar[str] = "add_to_cart"
    item: Union[MenuItem, str]


@dataclass(frozen=True)
class RemoveFromCart(Command):
    method: ClassVar[str] = "remove_from_cart"
    item_id: str


@dataclass(frozen=True)
class UpdateQuantity(Command):
    method: ClassVar[str] = "update_quantity"
    item_id: str
    quantity: int


@dataclass(frozen=True)
class UpdateCartInstructions(Command):
    method: ClassVar[str] = "set_special_instructions"
    item_id: str
    instructions: str


@dataclass(frozen=True)
class ClearCart(Command):
    method: ClassVar[str] = "clear_cart"


# orders
@dataclass(frozen=True)
class PlaceOrder(Command):
    method: ClassVar[str] = "place_order"
    draft: OrderDraft


@dataclass(frozen=True)
class UpdateOrderStatus(Command):
    method: ClassVar[str] = "update_status"
    order_id: str
    status: OrderStatus
    force: bool = False


@dataclass(frozen=True)
class BulkUpdateOrderStatus(Command):
    method: ClassVar[str] = "bulk_update_status"
    order_ids: List[str] = field(default_factory=list)
    status: OrderStatus = OrderStatus.confirmed
    force: bool = False


@dataclass(frozen=True)
class CancelOrder(Command):
    method: ClassVar[str] = "cancel_order"
    order_id: str


@dataclass(frozen=True)
class UpdateOrder(Command):
    method: ClassVar[str] = "update_order"
    order_id: str
    edit: OrderEdit


@dataclass(frozen=True)
class UpdatePaymentStatus(Command):
    method: ClassVar[str] = "update_payment_status"
    order_id: str
    payment_status: str


@dataclass(frozen=True)
class AddReview(Command):
    method: ClassVar[str] = "add_review"
    order_id: str
    review: ReviewCreate


# session
@dataclass(frozen=True)
class SetTableNumber(Command):
    method: ClassVar[str] = "set_table_number"
    table_number: int


@dataclass(frozen=True)
class SetRestaurant(Command):
    method: ClassVar[str] = "set_restaurant"
    restaurant_id: str


@dataclass(frozen=True)
class SetLanguage(Command):
    method: ClassVar[str] = "set_language"
    language: str


@dataclass(frozen=True)
class SetCurrency(Command):
    method: ClassVar[str] = "set_currency"
    currency: str


@dataclass(frozen=True)
class SetDeliveryZone(Command):
    method: ClassVar[str] = "set_delivery_zone"
    zone_id: str


@dataclass(frozen=True)
class ToggleTheme(Command):
    method: ClassVar[str] = "toggle_theme"


# menu
@dataclass(frozen=True)
class AddMenuItem(Command):
    method: ClassVar[str] = "add_menu_item"
    item: Union[MenuItemCreate, MenuItem]


@dataclass(frozen=True)
class UpdateMenuItem(Command):
    method: ClassVar[str] = "update_menu_item"
    item: MenuItem


@dataclass(frozen=True)
class ToggleMenuItemAvailability(Command):
    method: ClassVar[str] = "toggle_menu_item_availability"
    item_id: str


@dataclass(frozen=True)
class DuplicateMenuItem(Command):
    method: ClassVar[str] = "duplicate_menu_item"
    item_id: str


# notifications
@dataclass(frozen=True)
class AddNotification(Command):
    method: ClassVar[str] = "add_notification"
    notification: NotificationCreate


@dataclass(frozen=True)
class MarkNotificationRead(Command):
    method: ClassVar[str] = "mark_notification_read"
    notification_id: str


@dataclass(frozen=True)
class MarkAllNotificationsRead(Command):
    method: ClassVar[str] = "mark_all_notifications_read"


@dataclass(frozen=True)
class ClearNotifications(Command):
    method: ClassVar[str] = "clear_notifications"


# search and filters
@dataclass(frozen=True)
class SetSearchQuery(Command):
    method: ClassVar[str] = "set_search_query"
    query: str


@dataclass(frozen=True)
class SetFilters(Command):
    method: ClassVar[str] = "set_filters"
    update: FilterUpdate


@dataclass(frozen=True)
class ClearFilters(Command):
    method: ClassVar[str] = "clear_filters"


def command_kwargs(command: Command) -> dict:
    return {entry.name: getattr(command, entry.name) for entry in fields(command)}

