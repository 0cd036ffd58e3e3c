from decimal import Decimal
import random

import pytest

from table_order.core.errors import OrderValidationError
from table_order.core.metrics import InMemoryCommandMetrics
from table_order.data.menu import default_menu
from table_order.services import cart as cart_service
from table_order.services.store import OrderStore
from tests.fixtures_data import FakeClock


def _store():
    return OrderStore(default_menu(), clock=FakeClock(), metrics=InMemoryCommandMetrics())


def _lines(store):
    return {line.id: line.quantity for line in store.cart()}


def test_add_to_cart_increments_existing_line():
    store = _store()

    store.add_to_cart("nshima")
    store.add_to_cart("nshima")
    store.add_to_cart("grilled-chicken")

    assert _lines(store) == {"nshima": 2, "grilled-chicken": 1}
    assert [line.id for line in store.cart()] == ["nshima", "grilled-chicken"]
    assert store.cart_total() == Decimal("175.00")
    assert store.cart_count() == 3
    assert store.cart_estimated_time() == 25


def test_update_quantity_to_zero_removes_line():
    store = _store()
    store.add_to_cart("maheu")

    store.update_quantity("maheu", 3)
    assert _lines(store) == {"maheu": 3}

    store.update_quantity("maheu", 0)
    assert store.cart() == []
    assert store.cart_total() == Decimal("0.00")
    assert store.cart_estimated_time() == 0


def test_negative_quantity_is_rejected_and_cart_is_unchanged():
    store = _store()
    store.add_to_cart("maheu")

    with pytest.raises(OrderValidationError):
        store.update_quantity("maheu", -1)

    assert _lines(store) == {"maheu": 1}


def test_operations_on_unknown_ids_are_noops():
    store = _store()
    store.add_to_cart("maheu")

    store.add_to_cart("does-not-exist")
    store.update_quantity("does-not-exist", 4)
    store.remove_from_cart("does-not-exist")
    store.set_special_instructions("does-not-exist", "extra hot")

    assert _lines(store) == {"maheu": 1}


def test_special_instructions_attach_to_line():
    store = _store()
    store.add_to_cart("tbone")

    store.set_special_instructions("tbone", "medium rare, no relish")

    assert store.cart()[0].special_instructions == "medium rare, no relish"


def test_remove_and_readd_leaves_no_residual_instructions():
    store = _store()
    store.add_to_cart("tbone")
    reference = [line.model_dump() for line in store.cart()]

    store.set_special_instructions("tbone", "well done")
    store.update_quantity("tbone", 4)
    store.remove_from_cart("tbone")
    store.add_to_cart("tbone")

    assert [line.model_dump() for line in store.cart()] == reference


def test_cart_lines_are_snapshots_of_the_catalog():
    store = _store()
    store.add_to_cart("nshima")

    item = store.get_menu_item("nshima")
    store.update_menu_item(item.model_copy(update={"price": Decimal("99.00")}))

    assert store.cart()[0].price == Decimal("45.00")


def test_random_sequences_keep_total_invariant():
    rng = random.Random(7)
    store = _store()
    ids = [item.id for item in store.menu_items()]

    for _ in range(200):
        item_id = rng.choice(ids)
        action = rng.choice(["add", "remove", "set"])
        if action == "add":
            store.add_to_cart(item_id)
        elif action == "remove":
            store.remove_from_cart(item_id)
        else:
            store.update_quantity(item_id, rng.randint(0, 4))

        lines = store.cart()
        assert all(line.quantity >= 1 for line in lines)
        assert store.cart_total() == sum((line.price * line.quantity for line in lines), Decimal("0"))


def test_pure_cart_functions_do_not_mutate_input():
    menu = {item.id: item for item in default_menu()}
    original = cart_service.add_item([], menu["maheu"])

    updated = cart_service.update_quantity(original, "maheu", 5)

    assert original[0].quantity == 1
    assert updated[0].quantity == 5
    assert [entry.id for entry in cart_service.remove_item(updated, "maheu")] == []
    assert [entry.id for entry in updated] == ["maheu"]
