import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from table_order.core.config import CORS_ORIGINS, ENV, SEED_MENU
from table_order.core.database import Base, SessionLocal, engine
from table_order.core.logging_setup import configure_logging
from table_order.data.menu import default_categories, default_menu
from table_order.middleware.observability import ObservabilityMiddleware
import table_order.models  # models must be imported before create_all
from table_order.routers.analytics import router as analytics_router
from table_order.routers.cart import router as cart_router
from table_order.routers.internal_metrics import router as internal_metrics_router
from table_order.routers.menu import router as menu_router
from table_order.routers.notifications import router as notifications_router
from table_order.routers.orders import router as orders_router
from table_order.routers.session import router as session_router
from table_order.services.preferences import PreferenceService
from table_order.services.store import OrderStore

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


def create_store(seed: bool = SEED_MENU) -> OrderStore:
    return OrderStore(
        default_menu() if seed else [],
        default_categories() if seed else [],
        preferences=PreferenceService(SessionLocal),
    )


def _startup_tasks() -> None:
    try:
        Base.metadata.create_all(bind=engine)
        app.state.store = create_store()
        logger.info("%s store ready env=%s seed_menu=%s", STARTUP_PREFIX, ENV, SEED_MENU)
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Table Order API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

# Routers
app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(orders_router)
app.include_router(notifications_router)
app.include_router(analytics_router)
app.include_router(session_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}
