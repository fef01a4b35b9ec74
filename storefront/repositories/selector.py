# storefront/repositories/selector.py

"""Process-wide choice of catalog backend.

The backend is built on first access from the DATA_PROVIDER setting and reused
for the rest of the process. Callers get the repository only from here; the
backend modules are imported lazily below and nowhere else.
"""

import logging
from typing import Optional

from storefront.core.config import get_data_provider
from storefront.repositories.base import ProductRepository

logger = logging.getLogger(__name__)

MEMORY_PROVIDERS = {"memory", "mock", "fixture"}
SQL_PROVIDERS = {"sql", "database", "relational", "db"}

_repository: Optional[ProductRepository] = None


def _build_repository(provider: str) -> ProductRepository:
    if provider in SQL_PROVIDERS:
        from storefront.db.database import AsyncSessionLocal
        from storefront.repositories.sql import SqlProductRepository

        logger.info("Catalog data provider: relational database")
        return SqlProductRepository(AsyncSessionLocal)

    if provider not in MEMORY_PROVIDERS:
        logger.warning("Unknown DATA_PROVIDER %r, falling back to the in-memory catalog", provider)

    from storefront.repositories.memory import InMemoryProductRepository

    logger.info("Catalog data provider: in-memory fixtures")
    return InMemoryProductRepository()


def get_product_repository() -> ProductRepository:
    global _repository
    if _repository is None:
        _repository = _build_repository(get_data_provider())
    return _repository


def reset_product_repository() -> None:
    """Forget the cached backend. Only tests should need this."""
    global _repository
    _repository = None
