# storefront/core/config.py

import os
from pathlib import Path

# Which catalog backend the selector builds: "memory" or "sql"
DEFAULT_DATA_PROVIDER = "memory"

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./storefront.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() in ("1", "true", "yes")

CATALOG_FIXTURE_PATH = os.environ.get(
    "CATALOG_FIXTURE_PATH",
    str(Path(__file__).resolve().parent.parent / "data" / "products.json"),
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]


def get_data_provider() -> str:
    # Read at call time so the selector decides on first access, not on import
    return os.environ.get("DATA_PROVIDER", DEFAULT_DATA_PROVIDER).strip().lower()
