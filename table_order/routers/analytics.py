from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends

from table_order.deps import get_store
from table_order.schemas.analytics import Analytics
from table_order.services.store import OrderStore

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("", response_model=Analytics)
def get_analytics(
    view: Literal["summary", "extended"] = "extended",
    store: OrderStore = Depends(get_store),
):
    return store.analytics(view)
