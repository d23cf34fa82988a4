# storefront/utils/settings.py
import os
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# sqlite:// = baza w pamieci procesu, znika po restarcie
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")
REDIS_URL = os.getenv("REDIS_URL") or None
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "memory://")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "cache+memory://")
CELERY_TASK_ALWAYS_EAGER = _flag("CELERY_TASK_ALWAYS_EAGER", "true")

TAX_RATE = Decimal(os.getenv("TAX_RATE", "0.08"))
CURRENCY = os.getenv("CURRENCY", "RWF")
MAX_ITEM_QUANTITY = int(os.getenv("MAX_ITEM_QUANTITY", 99))
# gorna granica kwot (ceny i sumy), kazda suma musi zmiescic sie w INTEGER bazy
MAX_MONEY_AMOUNT = int(os.getenv("MAX_MONEY_AMOUNT", 10**15))

CART_LOCK_TIMEOUT_SECONDS = float(os.getenv("CART_LOCK_TIMEOUT_SECONDS", 5))
CART_LOCK_TTL_SECONDS = int(os.getenv("CART_LOCK_TTL_SECONDS", 30))

STOREFRONT_API_URL = os.getenv("STOREFRONT_API_URL", "http://localhost:8000")
HTTP_TIMEOUT_SECONDS = float(os.getenv("HTTP_TIMEOUT_SECONDS", 5))
CART_ID_PATH = Path(os.getenv("CART_ID_PATH", Path.home() / ".storefront" / "cart_id"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SEED_CATALOG = _flag("SEED_CATALOG", "true")
