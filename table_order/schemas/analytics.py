from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PopularItem(BaseModel):
    item_id: str
    name: str
    category: str
    count: int
    revenue: Decimal


class PeakHour(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    orders: int


class CategoryStat(BaseModel):
    orders: int = 0
    revenue: Decimal = Decimal("0.00")


class DailyRevenue(BaseModel):
    date: date
    label: str
    revenue: Decimal
    orders: int


class Analytics(BaseModel):
    generated_at: datetime
    total_orders: int = 0
    total_revenue: Decimal = Decimal("0.00")
    average_order_value: Decimal = Decimal("0.00")
    popular_items: List[PopularItem] = Field(default_factory=list)
    peak_hours: List[PeakHour] = Field(default_factory=list)
    category_stats: Dict[str, CategoryStat] = Field(default_factory=dict)
    daily_revenue: List[DailyRevenue] = Field(default_factory=list)
    today_orders: int = 0
    today_revenue: Decimal = Decimal("0.00")
    last_7_days_orders: int = 0
    last_30_days_orders: int = 0
    conversion_rate: float = 0.0
    average_preparation_time: float = 0.0
    customer_satisfaction: Optional[float] = None
    status_counts: Dict[str, int] = Field(default_factory=dict)


class OrderStats(BaseModel):
    today_orders: int
    pending_orders: int
    completed_today: int
    total_revenue: Decimal
    average_order_value: Decimal
