import os
from decimal import Decimal

from dotenv import load_dotenv

# Loads .env from the project root
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./table_order.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SEED_MENU = os.getenv("SEED_MENU", "1").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}

# Preferences persisted across sessions
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en").strip() or "en"
DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "ZMW").strip().upper() or "ZMW"
LANGUAGE_PREFERENCE_KEY = "preferred-language"
CURRENCY_PREFERENCE_KEY = "preferred-currency"

# Menu filter defaults
DEFAULT_PRICE_MIN = Decimal(os.getenv("DEFAULT_PRICE_MIN", "0"))
DEFAULT_PRICE_MAX = Decimal(os.getenv("DEFAULT_PRICE_MAX", "200"))

ESTIMATED_TIME_BUFFER_MINUTES = int(os.getenv("ESTIMATED_TIME_BUFFER_MINUTES", "5"))

# Analytics
POPULAR_ITEMS_EXTENDED_LIMIT = 10
POPULAR_ITEMS_SUMMARY_LIMIT = 5
PEAK_HOURS_LIMIT = 5
DAILY_REVENUE_DAYS = 7

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]
