from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from table_order.schemas.filters import MenuFilters


class SessionState(BaseModel):
    table_number: Optional[int] = None
    restaurant_id: Optional[str] = None
    language: str
    currency: str
    zone_id: Optional[str] = None
    dark_mode: bool = False
    search_query: str = ""
    filters: MenuFilters


class TableUpdate(BaseModel):
    table_number: int = Field(..., gt=0)


class ValueUpdate(BaseModel):
    value: str = Field(..., min_length=1)
