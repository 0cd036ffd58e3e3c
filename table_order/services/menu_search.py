from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from table_order.core.config import DEFAULT_PRICE_MAX, DEFAULT_PRICE_MIN
from table_order.schemas.filters import MenuFilters, MenuSearchResult
from table_order.schemas.menu import MenuItem

ALL_CATEGORIES = "all"
POPULAR_THRESHOLD = 4


def normalize(text: str | None) -> str:
    return (text or "").lower()


def _in_category(item: MenuItem, category: Optional[str]) -> bool:
    if not category or category == ALL_CATEGORIES:
        return True
    return item.category == category


def matches_query(item: MenuItem, query: str, include_ingredients: bool = True) -> bool:
    needle = normalize(query)
    if not needle:
        return True
    if needle in normalize(item.name) or needle in normalize(item.description):
        return True
    if include_ingredients:
        return any(needle in normalize(ingredient) for ingredient in item.ingredients)
    return False


def matches_dietary(item: MenuItem, dietary: Iterable[str]) -> bool:
    wanted = set(dietary)
    if not wanted:
        return True
    return any(tag in wanted for tag in item.dietary)


def matches_spice(item: MenuItem, spice_levels: Iterable[str]) -> bool:
    wanted = {str(getattr(level, "value", level)) for level in spice_levels}
    if not wanted:
        return True
    return item.spicy_level is not None and item.spicy_level.value in wanted


def matches_price(item: MenuItem, filters: MenuFilters) -> bool:
    low, high = filters.price_range
    return low <= item.price <= high


def active_filter_count(query: str, filters: MenuFilters) -> int:
    count = len(filters.dietary) + len(filters.spicy_level)
    if normalize(query):
        count += 1
    if tuple(filters.price_range) != (DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX):
        count += 1
    return count


def filter_menu(
    items: Iterable[MenuItem],
    category: Optional[str],
    query: str,
    filters: MenuFilters,
) -> MenuSearchResult:
    scoped = [item for item in items if _in_category(item, category) and item.available]

    results = [
        item
        for item in scoped
        if matches_query(item, query)
        and matches_dietary(item, filters.dietary)
        and matches_spice(item, filters.spicy_level)
        and matches_price(item, filters)
    ]
    # sorted() is stable, so equal popularity keeps catalog order
    results = sorted(results, key=lambda item: item.popularity or 0, reverse=True)

    return MenuSearchResult(
        items=results,
        total_in_scope=len(scoped),
        active_filter_count=active_filter_count(query, filters),
    )


def popular_items(items: Iterable[MenuItem]) -> List[MenuItem]:
    return [item for item in items if item.popularity and item.popularity >= POPULAR_THRESHOLD]


def admin_menu(items: Iterable[MenuItem], category: Optional[str], query: str) -> List[MenuItem]:
    """Staff listing: unavailable items included, ingredients not searched."""
    return [
        item
        for item in items
        if _in_category(item, category) and matches_query(item, query, include_ingredients=False)
    ]


def category_stats(items: Iterable[MenuItem]) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = {}
    for item in items:
        entry = stats.setdefault(item.category, {"total": 0, "available": 0})
        entry["total"] += 1
        if item.available:
            entry["available"] += 1
    return stats
