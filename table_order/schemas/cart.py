from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from table_order.schemas.menu import MenuItem


class CartItem(MenuItem):
    quantity: int = Field(..., ge=1)
    special_instructions: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_menu_item(cls, item: MenuItem, quantity: int = 1) -> "CartItem":
        data = item.model_dump(exclude={"quantity", "special_instructions"})
        return cls(**data, quantity=quantity)


class CartAdd(BaseModel):
    item_id: str


class QuantityUpdate(BaseModel):
    quantity: int


class InstructionsUpdate(BaseModel):
    instructions: str = ""


class CartView(BaseModel):
    items: List[CartItem]
    total: Decimal
    count: int
    estimated_time: int
