"""In-memory state owner for one table-ordering session.

Every command runs under a single re-entrant lock. A command mutates state
and queues its order events; once the outermost command returns, the queued
events are emitted (notifications are created by the handlers), analytics are
recomputed if the order list changed and the locale preferences are saved if
language or currency changed. A command that raises leaves state untouched
and drops whatever it had queued.
"""

from __future__ import annotations

import functools
import logging
import time
from datetime import datetime
from decimal import Decimal
from threading import RLock
from typing import Callable, Iterable, List, Optional, Union

from pydantic import ValidationError

from table_order.core.config import DEFAULT_CURRENCY, DEFAULT_LANGUAGE
from table_order.core.errors import OrderValidationError
from table_order.core.metrics import InMemoryCommandMetrics, command_metrics
from table_order.schemas.analytics import Analytics, OrderStats
from table_order.schemas.cart import CartItem
from table_order.schemas.filters import FilterUpdate, MenuFilters, MenuSearchResult
from table_order.schemas.menu import Category, MenuItem, MenuItemCreate
from table_order.schemas.notification import Notification, NotificationCreate
from table_order.schemas.order import (
    Order,
    OrderDraft,
    OrderEdit,
    OrderStatus,
    Review,
    ReviewCreate,
)
from table_order.schemas.session import SessionState
from table_order.services import analytics as analytics_service
from table_order.services import cart as cart_service
from table_order.services import menu_search
from table_order.services import notifications as notification_service
from table_order.services import orders as order_service
from table_order.services.commands import Command, command_kwargs
from table_order.services.event_bus import EventBus
from table_order.services.event_handlers import register_notification_handlers
from table_order.services.order_events import (
    order_placed_events,
    order_reviewed_events,
    order_status_events,
    order_updated_events,
)
from table_order.services.preferences import PreferenceService

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_CLOSED_STATUSES = {OrderStatus.completed, OrderStatus.cancelled}


def command(name: str):
    """Serialize a store method and run post-commit effects after the outermost call."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self: "OrderStore", *args, **kwargs):
            with self._lock:
                outermost = self._depth == 0
                self._depth += 1
                started = time.perf_counter()
                failed = False
                try:
                    result = method(self, *args, **kwargs)
                except Exception:
                    failed = True
                    if outermost:
                        self._discard_effects()
                    raise
                finally:
                    self._depth -= 1
                    if outermost:
                        duration_ms = (time.perf_counter() - started) * 1000
                        self._metrics.observe(name, duration_ms, failed=failed)
                        logger.debug(
                            "command %s finished",
                            name,
                            extra={"command": name, "duration_ms": round(duration_ms, 3)},
                        )
                if outermost:
                    self._run_post_commit()
                return result

        return wrapper

    return decorator


class OrderStore:
    def __init__(
        self,
        menu_items: Optional[Iterable[MenuItem]] = None,
        categories: Optional[Iterable[Category]] = None,
        *,
        preferences: Optional[PreferenceService] = None,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Clock] = None,
        metrics: InMemoryCommandMetrics = command_metrics,
    ) -> None:
        self._lock = RLock()
        self._clock: Clock = clock or datetime.now
        self._metrics = metrics
        self._preferences = preferences
        self._bus = event_bus or EventBus()

        self._depth = 0
        self._outbox: List[tuple[str, dict]] = []
        self._orders_changed = False
        self._locale_changed = False
        self._last_id_ms = 0

        self._menu: List[MenuItem] = [item.model_copy(deep=True) for item in (menu_items or [])]
        self._categories: List[Category] = list(categories or [])
        self._cart: List[CartItem] = []
        self._orders: List[Order] = []
        self._notifications: List[Notification] = []
        self._reviews: List[Review] = []

        self._table_number: Optional[int] = None
        self._restaurant_id: Optional[str] = None
        self._zone_id: Optional[str] = None
        self._language = DEFAULT_LANGUAGE
        self._currency = DEFAULT_CURRENCY
        self._dark_mode = False
        self._search_query = ""
        self._filters = MenuFilters()

        self._load_preferences()
        self._analytics = analytics_service.compute_analytics([], self._clock())
        register_notification_handlers(self._bus, self._notify)

    # ------------------------------------------------------------------
    # internals

    def _load_preferences(self) -> None:
        if self._preferences is None:
            return
        language, currency = self._preferences.load_locale()
        if language:
            self._language = language
        if currency:
            self._currency = currency

    def _next_id(self) -> str:
        millis = int(self._clock().timestamp() * 1000)
        if millis <= self._last_id_ms:
            millis = self._last_id_ms + 1
        self._last_id_ms = millis
        return str(millis)

    def _discard_effects(self) -> None:
        self._outbox = []
        self._orders_changed = False
        self._locale_changed = False

    def _run_post_commit(self) -> None:
        events, self._outbox = self._outbox, []
        for event_name, payload in events:
            self._bus.emit(event_name, payload)

        if self._orders_changed:
            self._orders_changed = False
            self._analytics = analytics_service.compute_analytics(self._orders, self._clock())

        if self._locale_changed:
            self._locale_changed = False
            if self._preferences is not None:
                self._preferences.save_locale(self._language, self._currency)

    def _notify(self, data: NotificationCreate, restaurant_id: Optional[str]) -> Notification:
        with self._lock:
            notification = notification_service.build_notification(
                data,
                notification_id=f"{self._next_id()}_notif",
                timestamp=self._clock(),
                restaurant_id=restaurant_id,
            )
            self._notifications.append(notification)
            return notification.model_copy()

    def _find_order(self, order_id: str) -> Optional[int]:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                return index
        logger.debug("order not found order_id=%s", order_id, extra={"order_id": order_id})
        return None

    def _find_menu_item(self, item_id: str) -> Optional[int]:
        for index, item in enumerate(self._menu):
            if item.id == item_id:
                return index
        logger.debug("menu item not found item_id=%s", item_id)
        return None

    def _replace_order(self, index: int, order: Order, events: List[tuple[str, dict]]) -> Order:
        self._orders[index] = order
        self._outbox.extend(events)
        self._orders_changed = True
        return order.model_copy(deep=True)

    # ------------------------------------------------------------------
    # dispatch

    def dispatch(self, cmd: Command):
        handler = getattr(self, cmd.method, None)
        if handler is None:
            raise OrderValidationError(f"Unsupported command: {type(cmd).__name__}")
        return handler(**command_kwargs(cmd))

    # ------------------------------------------------------------------
    # cart commands

    @command("add_to_cart")
    def add_to_cart(self, item: Union[MenuItem, str]) -> List[CartItem]:
        if isinstance(item, str):
            index = self._find_menu_item(item)
            if index is None:
                return self.cart()
            item = self._menu[index]
        self._cart = cart_service.add_item(self._cart, item)
        return self.cart()

    @command("update_quantity")
    def update_quantity(self, item_id: str, quantity: int) -> List[CartItem]:
        self._cart = cart_service.update_quantity(self._cart, item_id, quantity)
        return self.cart()

    @command("remove_from_cart")
    def remove_from_cart(self, item_id: str) -> List[CartItem]:
        self._cart = cart_service.remove_item(self._cart, item_id)
        return self.cart()

    @command("set_special_instructions")
    def set_special_instructions(self, item_id: str, instructions: str) -> List[CartItem]:
        self._cart = cart_service.set_instructions(self._cart, item_id, instructions)
        return self.cart()

    @command("clear_cart")
    def clear_cart(self) -> None:
        self._cart = []

    # ------------------------------------------------------------------
    # order commands

    @command("place_order")
    def place_order(self, draft: OrderDraft) -> Order:
        """Turn the cart into a pending order.

        Raises OrderValidationError, leaving cart and orders unchanged, when
        the cart is empty, name or phone is blank, or no table number is set.
        """
        # validate before taking an id so a rejected draft leaves no trace
        order_service.validate_draft(draft, self._cart, draft.table_number or self._table_number)
        order = order_service.build_order(
            draft,
            self._cart,
            order_id=self._next_id(),
            timestamp=self._clock(),
            table_number=self._table_number,
            restaurant_id=self._restaurant_id,
            zone_id=self._zone_id,
            currency=self._currency,
        )
        self._orders.append(order)
        self._outbox.extend(order_placed_events(order))
        self._orders_changed = True
        self.clear_cart()
        logger.info(
            "order placed order_id=%s items=%s total=%s",
            order.id,
            len(order.items),
            order.total,
            extra={"order_id": order.id},
        )
        return order.model_copy(deep=True)

    @command("update_status")
    def update_status(self, order_id: str, status: OrderStatus, force: bool = False) -> Optional[Order]:
        index = self._find_order(order_id)
        if index is None:
            return None
        current = self._orders[index]
        status = OrderStatus(status)
        if current.status == status:
            return current.model_copy(deep=True)
        order_service.check_transition(current, status, force=force)
        updated = current.model_copy(update={"status": status})
        logger.info(
            "order status changed order_id=%s from=%s to=%s",
            order_id,
            current.status.value,
            status.value,
            extra={"order_id": order_id},
        )
        return self._replace_order(index, updated, order_status_events(updated, current.status))

    @command("cancel_order")
    def cancel_order(self, order_id: str) -> Optional[Order]:
        return self.update_status(order_id, OrderStatus.cancelled)

    @command("bulk_update_status")
    def bulk_update_status(self, order_ids: List[str], status: OrderStatus, force: bool = False) -> List[Order]:
        # validate every order first so the batch applies all or nothing
        status = OrderStatus(status)
        targets = []
        for order_id in order_ids:
            index = self._find_order(order_id)
            if index is None:
                continue
            current = self._orders[index]
            if current.status != status:
                order_service.check_transition(current, status, force=force)
                targets.append(order_id)
        return [self.update_status(order_id, status, force=force) for order_id in targets]

    @command("update_order")
    def update_order(self, order_id: str, edit: OrderEdit) -> Optional[Order]:
        index = self._find_order(order_id)
        if index is None:
            return None
        current = self._orders[index]
        if current.status in _CLOSED_STATUSES:
            raise OrderValidationError(f"Order {order_id} is {current.status.value} and cannot be edited")
        updated = order_service.apply_edit(current, edit)
        return self._replace_order(index, updated, order_updated_events(updated))

    @command("update_payment_status")
    def update_payment_status(self, order_id: str, payment_status: str) -> Optional[Order]:
        index = self._find_order(order_id)
        if index is None:
            return None
        try:
            updated = Order.model_validate(
                {**self._orders[index].model_dump(), "payment_status": payment_status}
            )
        except ValidationError as exc:
            raise OrderValidationError(f"Unknown payment status: {payment_status}") from exc
        return self._replace_order(index, updated, [])

    @command("add_review")
    def add_review(self, order_id: str, review: ReviewCreate) -> Optional[Review]:
        if not 1 <= review.rating <= 5:
            raise OrderValidationError("Rating must be between 1 and 5")
        index = self._find_order(order_id)
        if index is None:
            return None
        updated = self._orders[index].model_copy(
            update={"rating": review.rating, "review": review.comment}
        )
        self._replace_order(index, updated, order_reviewed_events(updated))
        record = Review(
            order_id=order_id,
            rating=review.rating,
            comment=review.comment,
            aspects=list(review.aspects),
            timestamp=self._clock(),
        )
        self._reviews.append(record)
        return record.model_copy()

    # ------------------------------------------------------------------
    # session commands

    @command("set_table_number")
    def set_table_number(self, table_number: int) -> int:
        if table_number is None or table_number <= 0:
            raise OrderValidationError("Table number must be a positive integer")
        self._table_number = table_number
        return table_number

    @command("set_restaurant")
    def set_restaurant(self, restaurant_id: str) -> str:
        self._restaurant_id = restaurant_id
        return restaurant_id

    @command("set_language")
    def set_language(self, language: str) -> str:
        if language != self._language:
            self._language = language
            self._locale_changed = True
        return language

    @command("set_currency")
    def set_currency(self, currency: str) -> str:
        currency = currency.upper()
        if currency != self._currency:
            self._currency = currency
            self._locale_changed = True
        return currency

    @command("set_delivery_zone")
    def set_delivery_zone(self, zone_id: str) -> str:
        self._zone_id = zone_id
        return zone_id

    @command("toggle_theme")
    def toggle_theme(self) -> bool:
        self._dark_mode = not self._dark_mode
        return self._dark_mode

    # ------------------------------------------------------------------
    # menu commands

    @command("add_menu_item")
    def add_menu_item(self, item: Union[MenuItemCreate, MenuItem]) -> MenuItem:
        data = item.model_dump()
        data["id"] = data.get("id") or f"item_{self._next_id()}"
        if self._find_menu_item(data["id"]) is not None:
            raise OrderValidationError(f"Menu item {data['id']} already exists")
        created = MenuItem(**data)
        self._menu.append(created)
        logger.info("menu item added item_id=%s", created.id)
        return created.model_copy(deep=True)

    @command("update_menu_item")
    def update_menu_item(self, item: MenuItem) -> Optional[MenuItem]:
        # placed orders and cart lines hold their own snapshots
        index = self._find_menu_item(item.id)
        if index is None:
            return None
        self._menu[index] = item.model_copy(deep=True)
        return item.model_copy(deep=True)

    @command("toggle_menu_item_availability")
    def toggle_menu_item_availability(self, item_id: str) -> Optional[MenuItem]:
        index = self._find_menu_item(item_id)
        if index is None:
            return None
        current = self._menu[index]
        self._menu[index] = current.model_copy(update={"available": not current.available})
        return self._menu[index].model_copy(deep=True)

    @command("duplicate_menu_item")
    def duplicate_menu_item(self, item_id: str) -> Optional[MenuItem]:
        index = self._find_menu_item(item_id)
        if index is None:
            return None
        source = self._menu[index]
        copy = source.model_copy(
            deep=True,
            update={"id": f"{source.id}_copy_{self._next_id()}", "name": f"{source.name} (Copy)"},
        )
        self._menu.append(copy)
        return copy.model_copy(deep=True)

    # ------------------------------------------------------------------
    # notification commands

    @command("add_notification")
    def add_notification(self, notification: NotificationCreate) -> Notification:
        return self._notify(notification, self._restaurant_id)

    @command("mark_notification_read")
    def mark_notification_read(self, notification_id: str) -> None:
        self._notifications = notification_service.mark_read(self._notifications, notification_id)

    @command("mark_all_notifications_read")
    def mark_all_notifications_read(self) -> None:
        self._notifications = notification_service.mark_all_read(self._notifications)

    @command("clear_notifications")
    def clear_notifications(self) -> None:
        self._notifications = []

    # ------------------------------------------------------------------
    # search and filter commands

    @command("set_search_query")
    def set_search_query(self, query: str) -> str:
        self._search_query = query or ""
        return self._search_query

    @command("set_filters")
    def set_filters(self, update: FilterUpdate) -> MenuFilters:
        merged = {**self._filters.model_dump(), **update.model_dump(exclude_none=True)}
        try:
            self._filters = MenuFilters(**merged)
        except ValidationError as exc:
            raise OrderValidationError(str(exc)) from exc
        return self._filters.model_copy(deep=True)

    @command("clear_filters")
    def clear_filters(self) -> MenuFilters:
        self._filters = MenuFilters()
        self._search_query = ""
        return self._filters.model_copy(deep=True)

    # ------------------------------------------------------------------
    # queries

    def cart(self) -> List[CartItem]:
        with self._lock:
            return [line.model_copy(deep=True) for line in self._cart]

    def cart_total(self) -> Decimal:
        with self._lock:
            return cart_service.cart_total(self._cart)

    def cart_count(self) -> int:
        with self._lock:
            return cart_service.cart_count(self._cart)

    def cart_estimated_time(self) -> int:
        with self._lock:
            return cart_service.estimated_time(self._cart)

    def list_orders(
        self,
        *,
        status: Optional[OrderStatus] = None,
        date_filter: str = "all",
        payment_status: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "timestamp",
        sort_order: str = "desc",
    ) -> List[Order]:
        with self._lock:
            result = order_service.filter_orders(
                self._orders,
                now=self._clock(),
                status=status,
                date_filter=date_filter,
                payment_status=payment_status,
                search=search,
                sort_by=sort_by,
                sort_order=sort_order,
            )
            return [order.model_copy(deep=True) for order in result]

    def get_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            index = self._find_order(order_id)
            return None if index is None else self._orders[index].model_copy(deep=True)

    def order_stats(self) -> OrderStats:
        with self._lock:
            return order_service.order_stats(self._orders, self._clock())

    def menu(self, category: Optional[str] = None) -> MenuSearchResult:
        """Customer view: available items in scope filtered by the session query and filters."""
        with self._lock:
            result = menu_search.filter_menu(self._menu, category, self._search_query, self._filters)
            return result.model_copy(deep=True)

    def popular_menu_items(self) -> List[MenuItem]:
        with self._lock:
            items = [item for item in self._menu if item.available]
            return [item.model_copy(deep=True) for item in menu_search.popular_items(items)]

    def menu_items(self) -> List[MenuItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in self._menu]

    def get_menu_item(self, item_id: str) -> Optional[MenuItem]:
        with self._lock:
            index = self._find_menu_item(item_id)
            return None if index is None else self._menu[index].model_copy(deep=True)

    def admin_menu(self, category: Optional[str] = None, query: str = "") -> List[MenuItem]:
        with self._lock:
            return [item.model_copy(deep=True) for item in menu_search.admin_menu(self._menu, category, query)]

    def categories(self) -> List[Category]:
        with self._lock:
            return [category.model_copy() for category in self._categories]

    def category_stats(self) -> dict:
        with self._lock:
            return menu_search.category_stats(self._menu)

    def notifications(self) -> List[Notification]:
        with self._lock:
            return [entry.model_copy() for entry in notification_service.newest_first(self._notifications)]

    def unread_count(self) -> int:
        with self._lock:
            return notification_service.unread_count(self._notifications)

    def reviews(self) -> List[Review]:
        with self._lock:
            return [review.model_copy() for review in self._reviews]

    def analytics(self, view: str = "extended") -> Analytics:
        with self._lock:
            now = self._clock()
            if self._analytics.generated_at.date() != now.date():
                # day-relative figures go stale at midnight
                self._analytics = analytics_service.compute_analytics(self._orders, now)
            snapshot = self._analytics.model_copy(deep=True)
        if view == "summary":
            return analytics_service.summary_view(snapshot)
        if view != "extended":
            raise OrderValidationError(f"Unknown analytics view: {view}")
        return snapshot

    def session(self) -> SessionState:
        with self._lock:
            return SessionState(
                table_number=self._table_number,
                restaurant_id=self._restaurant_id,
                language=self._language,
                currency=self._currency,
                zone_id=self._zone_id,
                dark_mode=self._dark_mode,
                search_query=self._search_query,
                filters=self._filters.model_copy(deep=True),
            )
