from __future__ import annotations

from fastapi import APIRouter

from table_order.core.metrics import command_metrics

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


@router.get("/commands")
def store_command_metrics():
    return {"commands": command_metrics.snapshot()}
