from decimal import Decimal
import itertools

import pytest

from table_order.core.errors import OrderValidationError
from table_order.core.metrics import InMemoryCommandMetrics
from table_order.data.menu import default_categories, default_menu
from table_order.schemas.filters import FilterUpdate, MenuFilters
from table_order.schemas.menu import MenuItemCreate
from table_order.services.menu_search import filter_menu
from tests.fixtures_data import NEW_MENU_ITEM, FakeClock
from table_order.services.store import OrderStore

CATEGORIES = [None, "all", "mains", "beverages", "desserts"]
QUERIES = ["", "GROUNDNUT", "maize", "chips", "zzz"]
DIETARY = [[], ["vegan"], ["halal", "gluten-free"]]
SPICE = [[], ["hot"], ["mild", "medium"]]
PRICES = [(Decimal("0"), Decimal("200")), (Decimal("20"), Decimal("45")), (Decimal("100"), Decimal("100"))]


def _store():
    return OrderStore(default_menu(), default_categories(), clock=FakeClock(), metrics=InMemoryCommandMetrics())


def _expected(item, category, query, dietary, spice, price_range):
    needle = query.lower()
    text_ok = (
        not needle
        or needle in item.name.lower()
        or needle in item.description.lower()
        or any(needle in ingredient.lower() for ingredient in item.ingredients)
    )
    return (
        item.available
        and (category in (None, "all") or item.category == category)
        and text_ok
        and (not dietary or bool(set(dietary) & set(item.dietary)))
        and (not spice or (item.spicy_level is not None and item.spicy_level.value in spice))
        and price_range[0] <= item.price <= price_range[1]
    )


def test_filtering_is_sound_and_complete():
    menu = default_menu()

    for category, query, dietary, spice, price_range in itertools.product(CATEGORIES, QUERIES, DIETARY, SPICE, PRICES):
        filters = MenuFilters(dietary=dietary, spicy_level=spice, price_range=price_range)
        result = filter_menu(menu, category, query, filters)

        expected = {item.id for item in menu if _expected(item, category, query, dietary, spice, price_range)}
        assert {item.id for item in result.items} == expected


def test_results_sorted_by_popularity_with_stable_ties():
    result = filter_menu(default_menu(), "mains", "", MenuFilters())

    assert [item.id for item in result.items] == ["nshima", "grilled-chicken", "ifisashi", "kapenta", "tbone"]


def test_unavailable_items_are_hidden_from_customers():
    store = _store()

    ids = {item.id for item in store.menu("desserts").items}

    assert "pumpkin-pudding" not in ids
    assert "pumpkin-pudding" in {item.id for item in store.admin_menu("desserts")}


def test_empty_result_is_distinguishable_from_no_filters():
    store = _store()

    unfiltered = store.menu()
    assert not unfiltered.has_active_filters
    assert not unfiltered.is_empty

    store.set_search_query("zzz")
    store.set_filters(FilterUpdate(dietary=["vegan"]))
    filtered = store.menu()

    assert filtered.is_empty
    assert filtered.has_active_filters
    assert filtered.active_filter_count == 2
    assert filtered.total_in_scope == unfiltered.total_in_scope


def test_set_filters_merges_and_clear_filters_resets_query():
    store = _store()

    store.set_filters(FilterUpdate(dietary=["vegan"]))
    store.set_filters(FilterUpdate(price_range=(Decimal("10"), Decimal("50"))))
    store.set_search_query("maize")

    session = store.session()
    assert session.filters.dietary == ["vegan"]
    assert session.filters.price_range == (Decimal("10"), Decimal("50"))

    store.clear_filters()
    session = store.session()
    assert session.filters == MenuFilters()
    assert session.search_query == ""


def test_invalid_price_range_is_rejected():
    store = _store()

    with pytest.raises(OrderValidationError):
        store.set_filters(FilterUpdate(price_range=(Decimal("50"), Decimal("10"))))

    assert store.session().filters == MenuFilters()


def test_admin_search_ignores_ingredients():
    store = _store()

    assert store.admin_menu(query="garlic") == []
    assert [item.id for item in store.admin_menu(query="GRILLED")] == ["grilled-chicken"]


def test_toggle_availability_twice_is_identity():
    store = _store()
    original = store.get_menu_item("maheu").available

    store.toggle_menu_item_availability("maheu")
    assert store.get_menu_item("maheu").available is not original
    store.toggle_menu_item_availability("maheu")

    assert store.get_menu_item("maheu").available is original


def test_add_and_duplicate_menu_items():
    store = _store()

    created = store.add_menu_item(MenuItemCreate(**NEW_MENU_ITEM))
    copy = store.duplicate_menu_item(created.id)

    assert created.id.startswith("item_")
    assert created.dietary == ["vegan", "gluten-free"]
    assert copy.id.startswith(f"{created.id}_copy_")
    assert copy.name == "Roasted Groundnuts (Copy)"
    assert copy.price == created.price
    with pytest.raises(OrderValidationError):
        store.add_menu_item(MenuItemCreate(**{**NEW_MENU_ITEM, "id": "nshima"}))


def test_category_stats_and_popular_items():
    store = _store()

    stats = store.category_stats()

    assert stats["desserts"] == {"total": 2, "available": 1}
    assert all(item.popularity >= 4 for item in store.popular_menu_items())
    assert [category.id for category in store.categories()][0] == "appetizers"
