from __future__ import annotations

from contextlib import contextmanager

from fastapi import HTTPException, status

from table_order.core.errors import InvalidStatusTransition, OrderValidationError


@contextmanager
def store_errors():
    """Translate rejected store commands into HTTP errors."""
    try:
        yield
    except InvalidStatusTransition as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except OrderValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc


def not_found(entity: str, entity_id: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{entity} {entity_id} not found")
