from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from table_order.schemas.cart import CartItem

PaymentMethod = Literal["cash", "mobile-money", "card", "crypto", "paypal"]
PaymentStatus = Literal["pending", "paid", "failed", "refunded"]
DeliveryType = Literal["dine-in", "takeaway", "delivery"]
OrderPriority = Literal["normal", "high", "urgent"]


class OrderStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    preparing = "preparing"
    ready = "ready"
    delivered = "delivered"
    completed = "completed"
    cancelled = "cancelled"


class OrderDraft(BaseModel):
    """What the customer submits at checkout; items always come from the cart."""

    customer_name: str = ""
    customer_phone: str = ""
    customer_email: Optional[str] = None
    notes: Optional[str] = None
    table_number: Optional[int] = None
    payment_method: PaymentMethod = "cash"
    delivery_type: DeliveryType = "dine-in"
    priority: OrderPriority = "normal"


class Order(BaseModel):
    id: str
    table_number: int
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    items: List[CartItem]
    total: Decimal
    status: OrderStatus = OrderStatus.pending
    timestamp: datetime
    estimated_time: int
    notes: Optional[str] = None
    payment_method: PaymentMethod = "cash"
    payment_status: PaymentStatus = "pending"
    delivery_type: DeliveryType = "dine-in"
    priority: OrderPriority = "normal"
    restaurant_id: Optional[str] = None
    zone_id: Optional[str] = None
    currency: Optional[str] = None
    rating: Optional[int] = None
    review: Optional[str] = None


class StatusUpdate(BaseModel):
    status: OrderStatus
    force: bool = False


class BulkStatusUpdate(BaseModel):
    order_ids: List[str]
    status: OrderStatus
    force: bool = False


class OrderLineEdit(BaseModel):
    item_id: str
    quantity: int = Field(..., ge=1)
    special_instructions: Optional[str] = None


class OrderEdit(BaseModel):
    items: Optional[List[OrderLineEdit]] = None
    notes: Optional[str] = None
    priority: Optional[OrderPriority] = None


class PaymentUpdate(BaseModel):
    payment_status: PaymentStatus


class ReviewCreate(BaseModel):
    rating: int
    comment: Optional[str] = None
    aspects: List[str] = Field(default_factory=list)


class Review(BaseModel):
    order_id: str
    rating: int
    comment: Optional[str] = None
    aspects: List[str] = Field(default_factory=list)
    timestamp: datetime
