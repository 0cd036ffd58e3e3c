from __future__ import annotations


class OrderStoreError(Exception):
    """Base class for commands rejected by the order store."""


class OrderValidationError(OrderStoreError, ValueError):
    pass


class InvalidStatusTransition(OrderStoreError):
    def __init__(self, order_id: str, current: str, requested: str) -> None:
        self.order_id = order_id
        self.current = current
        self.requested = requested
        super().__init__(f"Order {order_id} cannot move from {current} to {requested}")
