from __future__ import annotations

from fastapi import HTTPException, Request, status

from table_order.services.store import OrderStore


def get_store(request: Request) -> OrderStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Store not initialised")
    return store
