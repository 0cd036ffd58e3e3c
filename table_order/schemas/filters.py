from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, computed_field, model_validator

from table_order.core.config import DEFAULT_PRICE_MAX, DEFAULT_PRICE_MIN
from table_order.schemas.menu import DietaryTag, MenuItem, SpiceLevel


class MenuFilters(BaseModel):
    dietary: List[DietaryTag] = Field(default_factory=list)
    spicy_level: List[SpiceLevel] = Field(default_factory=list)
    price_range: Tuple[Decimal, Decimal] = (DEFAULT_PRICE_MIN, DEFAULT_PRICE_MAX)

    @model_validator(mode="after")
    def _check_price_range(self) -> "MenuFilters":
        low, high = self.price_range
        if low < 0 or high < low:
            raise ValueError("price_range must satisfy 0 <= min <= max")
        return self


class FilterUpdate(BaseModel):
    """Partial update merged into the current filters."""

    dietary: Optional[List[DietaryTag]] = None
    spicy_level: Optional[List[SpiceLevel]] = None
    price_range: Optional[Tuple[Decimal, Decimal]] = None


class SearchQuery(BaseModel):
    query: str = ""


class MenuSearchResult(BaseModel):
    items: List[MenuItem]
    total_in_scope: int
    active_filter_count: int

    @computed_field
    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.items
