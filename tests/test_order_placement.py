from decimal import Decimal

import pytest

from table_order.core.errors import OrderValidationError
from table_order.core.metrics import InMemoryCommandMetrics
from table_order.data.menu import default_menu
from table_order.schemas.order import OrderDraft, OrderStatus
from table_order.services.commands import AddToCart, PlaceOrder, SetTableNumber
from table_order.services.store import OrderStore
from tests.fixtures_data import LUNCH_TIME, MISSING_NAME_DRAFT, MISSING_PHONE_DRAFT, VALID_DRAFT, FakeClock


def _store_with_cart(table_number=7):
    store = OrderStore(default_menu(), clock=FakeClock(), metrics=InMemoryCommandMetrics())
    if table_number is not None:
        store.set_table_number(table_number)
    store.add_to_cart("nshima")
    store.add_to_cart("nshima")
    store.add_to_cart("grilled-chicken")
    return store


def test_place_order_snapshots_cart_and_clears_it():
    store = _store_with_cart()
    cart_total = store.cart_total()

    order = store.place_order(OrderDraft(**VALID_DRAFT))

    assert order.total == Decimal("175.00") == cart_total
    assert order.estimated_time == 25
    assert order.status == OrderStatus.pending
    assert order.table_number == 7
    assert order.timestamp == LUNCH_TIME
    assert order.currency == "ZMW"
    assert [(line.id, line.quantity) for line in order.items] == [("nshima", 2), ("grilled-chicken", 1)]
    assert store.cart() == []
    assert [entry.id for entry in store.list_orders()] == [order.id]


def test_place_order_emits_exactly_one_notification():
    store = _store_with_cart()

    order = store.place_order(OrderDraft(**VALID_DRAFT))

    notifications = store.notifications()
    assert len(notifications) == 1
    assert notifications[0].order_id == order.id
    assert notifications[0].title == "New Order Received"
    assert notifications[0].message == f"Order #{order.id[-4:]} from Table 7"
    assert store.unread_count() == 1


def test_order_id_is_a_millisecond_timestamp_and_unique():
    store = _store_with_cart()

    first = store.place_order(OrderDraft(**VALID_DRAFT))
    store.add_to_cart("maheu")
    second = store.place_order(OrderDraft(**VALID_DRAFT))

    assert first.id == str(int(LUNCH_TIME.timestamp() * 1000))
    assert int(second.id) > int(first.id)


def test_draft_table_number_overrides_session():
    store = _store_with_cart(table_number=None)

    order = store.place_order(OrderDraft(**VALID_DRAFT, table_number=12))

    assert order.table_number == 12


@pytest.mark.parametrize(
    "draft, table_number, empty_cart",
    [
        (VALID_DRAFT, 7, True),
        (MISSING_NAME_DRAFT, 7, False),
        (MISSING_PHONE_DRAFT, 7, False),
        (VALID_DRAFT, None, False),
    ],
)
def test_rejected_placement_leaves_state_unchanged(draft, table_number, empty_cart):
    store = _store_with_cart(table_number=table_number)
    if empty_cart:
        store.clear_cart()
    cart_before = store.cart()

    with pytest.raises(OrderValidationError):
        store.place_order(OrderDraft(**draft))

    assert store.list_orders() == []
    assert store.cart() == cart_before
    assert store.notifications() == []
    assert store.analytics().today_orders == 0


def test_rejected_placement_does_not_consume_an_order_id():
    store = _store_with_cart()

    with pytest.raises(OrderValidationError):
        store.place_order(OrderDraft(**MISSING_NAME_DRAFT))
    order = store.place_order(OrderDraft(**VALID_DRAFT))

    assert order.id == str(int(LUNCH_TIME.timestamp() * 1000))


def test_catalog_edits_do_not_touch_placed_orders():
    store = _store_with_cart()
    order = store.place_order(OrderDraft(**VALID_DRAFT))

    item = store.get_menu_item("nshima")
    store.update_menu_item(item.model_copy(update={"name": "Nshima (large)", "price": Decimal("60.00")}))

    stored = store.get_order(order.id)
    assert stored.items[0].name == "Nshima"
    assert stored.total == Decimal("175.00")


def test_dispatch_runs_typed_commands():
    store = OrderStore(default_menu(), clock=FakeClock(), metrics=InMemoryCommandMetrics())

    store.dispatch(SetTableNumber(table_number=3))
    store.dispatch(AddToCart(item="kapenta"))
    order = store.dispatch(PlaceOrder(draft=OrderDraft(**VALID_DRAFT)))

    assert order.table_number == 3
    assert order.total == Decimal("60.00")


def test_set_table_number_rejects_non_positive_values():
    store = OrderStore(default_menu(), clock=FakeClock(), metrics=InMemoryCommandMetrics())

    with pytest.raises(OrderValidationError):
        store.set_table_number(0)

    assert store.session().table_number is None
