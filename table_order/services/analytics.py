from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List

from table_order.core.config import (
    DAILY_REVENUE_DAYS,
    PEAK_HOURS_LIMIT,
    POPULAR_ITEMS_EXTENDED_LIMIT,
    POPULAR_ITEMS_SUMMARY_LIMIT,
)
from table_order.schemas.analytics import Analytics, CategoryStat, DailyRevenue, PeakHour, PopularItem
from table_order.schemas.order import Order, OrderStatus
from table_order.services.orders import day_bounds

CENT = Decimal("0.01")
DEFAULT_PREPARATION_MINUTES = 20


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT)


def completed_orders(orders: Iterable[Order]) -> List[Order]:
    return [order for order in orders if order.status == OrderStatus.completed]


def popular_items(completed: Iterable[Order], limit: int = POPULAR_ITEMS_EXTENDED_LIMIT) -> List[PopularItem]:
    grouped: Dict[str, PopularItem] = {}
    for order in completed:
        for line in order.items:
            entry = grouped.get(line.id)
            if entry is None:
                entry = PopularItem(
                    item_id=line.id,
                    name=line.name,
                    category=line.category,
                    count=0,
                    revenue=Decimal("0"),
                )
                grouped[line.id] = entry
            entry.count += line.quantity
            entry.revenue += line.line_total

    ranked = sorted(grouped.values(), key=lambda entry: entry.count, reverse=True)
    for entry in ranked:
        entry.revenue = _money(entry.revenue)
    return ranked[:limit]


def peak_hours(completed: Iterable[Order], limit: int = PEAK_HOURS_LIMIT) -> List[PeakHour]:
    counts = Counter(order.timestamp.hour for order in completed)
    ranked = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    return [PeakHour(hour=hour, orders=count) for hour, count in ranked[:limit]]


def category_stats(completed: Iterable[Order]) -> Dict[str, CategoryStat]:
    stats: Dict[str, CategoryStat] = {}
    for order in completed:
        for line in order.items:
            entry = stats.setdefault(line.category, CategoryStat())
            entry.orders += line.quantity
            entry.revenue = _money(entry.revenue + line.line_total)
    return stats


def orders_in_last_days(orders: Iterable[Order], now: datetime, days: int) -> int:
    # whole calendar days ending today, so the count only moves at midnight
    start, _ = day_bounds(now.date() - timedelta(days=days - 1))
    _, end = day_bounds(now.date())
    return sum(1 for order in orders if start <= order.timestamp <= end)


def daily_revenue(completed: Iterable[Order], now: datetime, days: int = DAILY_REVENUE_DAYS) -> List[DailyRevenue]:
    completed = list(completed)
    series: List[DailyRevenue] = []
    for offset in range(days - 1, -1, -1):
        day = now.date() - timedelta(days=offset)
        start, end = day_bounds(day)
        day_orders = [order for order in completed if start <= order.timestamp <= end]
        revenue = sum((order.total for order in day_orders), Decimal("0"))
        series.append(
            DailyRevenue(
                date=day,
                label=day.strftime("%b %d"),
                revenue=_money(revenue),
                orders=len(day_orders),
            )
        )
    return series


def compute_analytics(
    orders: Iterable[Order],
    now: datetime,
    popular_limit: int = POPULAR_ITEMS_EXTENDED_LIMIT,
) -> Analytics:
    """Recompute every aggregate from the order history.

    Only completed orders count toward revenue, popularity, peak hours and
    category figures; every status is still reflected in ``status_counts``
    and the period counters.
    """
    orders = list(orders)
    completed = completed_orders(orders)

    total_revenue = sum((order.total for order in completed), Decimal("0"))
    average = total_revenue / len(completed) if completed else Decimal("0")

    today = now.date()
    today_orders = [order for order in orders if order.timestamp.date() == today]
    today_revenue = sum(
        (order.total for order in today_orders if order.status == OrderStatus.completed),
        Decimal("0"),
    )
    week_orders = orders_in_last_days(orders, now, 7)
    month_orders = orders_in_last_days(orders, now, 30)

    ratings = [order.rating for order in orders if order.rating is not None]
    preparation = [order.estimated_time or DEFAULT_PREPARATION_MINUTES for order in completed]

    status_counts = {status.value: 0 for status in OrderStatus}
    for order in orders:
        status_counts[order.status.value] += 1

    return Analytics(
        generated_at=now,
        total_orders=len(completed),
        total_revenue=_money(total_revenue),
        average_order_value=_money(average),
        popular_items=popular_items(completed, limit=popular_limit),
        peak_hours=peak_hours(completed),
        category_stats=category_stats(completed),
        daily_revenue=daily_revenue(completed, now),
        today_orders=len(today_orders),
        today_revenue=_money(today_revenue),
        last_7_days_orders=week_orders,
        last_30_days_orders=month_orders,
        conversion_rate=round(len(completed) / len(orders) * 100, 2) if orders else 0.0,
        average_preparation_time=round(sum(preparation) / len(preparation), 2) if preparation else 0.0,
        customer_satisfaction=round(sum(ratings) / len(ratings), 2) if ratings else None,
        status_counts=status_counts,
    )


def summary_view(analytics: Analytics) -> Analytics:
    return analytics.model_copy(
        update={"popular_items": analytics.popular_items[:POPULAR_ITEMS_SUMMARY_LIMIT]}
    )
