# storefront/repositories/memory.py

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import TypeAdapter

from storefront.core import views
from storefront.core.config import CATALOG_FIXTURE_PATH
from storefront.core.variants import deduplicate_products, family_variants, find_product, resolve_base_id
from storefront.schemas.product import Inventory, PriceRange, Product
from storefront.schemas.query import PaginatedResult, ProductFilters, SortOption

logger = logging.getLogger(__name__)

_catalog_adapter = TypeAdapter(List[Product])


def load_catalog(path: str = CATALOG_FIXTURE_PATH) -> Tuple[Product, ...]:
    """Read the fixture catalog (a JSON list of product rows)."""
    with open(Path(path), "r", encoding="utf-8") as f:
        rows = json.load(f)
    products = tuple(_catalog_adapter.validate_python(rows))
    logger.info("Loaded %d catalog rows from %s", len(products), path)
    return products


class InMemoryProductRepository:
    """Catalog held in process. This is the reference behavior for every backend."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: Tuple[Product, ...] = tuple(products) if products is not None else load_catalog()

    async def get_all_products(self) -> List[Product]:
        return deduplicate_products(self._products)

    async def get_all_products_with_variants(self) -> List[Product]:
        return list(self._products)

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        return find_product(self._products, product_id)

    async def get_products_by_subcategory(self, category: str, subcategory: Optional[str] = None) -> List[Product]:
        return views.by_subcategory(self._products, category, subcategory)

    async def list_products(
        self,
        filters: Optional[ProductFilters] = None,
        sort: SortOption = SortOption.RELEVANCE,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PaginatedResult[Product]:
        return views.list_page(self._products, filters, sort, page, page_size)

    async def get_featured_products(self, limit: Optional[int] = 8) -> List[Product]:
        return views.featured(self._products, limit)

    async def get_new_arrivals(self, limit: Optional[int] = 4) -> List[Product]:
        return views.new_arrivals(self._products, limit)

    async def get_new_releases(self, limit: Optional[int] = None) -> List[Product]:
        return views.new_releases(self._products, limit)

    async def get_new_releases_by_category(self, category: str, limit: Optional[int] = None) -> List[Product]:
        return views.new_releases_by_category(self._products, category, limit)

    async def get_sale_products(self) -> List[Product]:
        return views.sale(self._products)

    async def search_products(self, query: str, limit: Optional[int] = 20) -> List[Product]:
        return views.search(self._products, query, limit)

    async def get_product_variants(self, base_product_id: str) -> List[Product]:
        return family_variants(self._products, base_product_id)

    async def get_base_product_id(self, product_id: str) -> Optional[str]:
        return resolve_base_id(self._products, product_id)

    async def get_price_range(self, product_ids: Optional[Iterable[str]] = None) -> PriceRange:
        return views.price_range(self._products, product_ids)

    async def get_inventory(self, product_id: str, variant_id: Optional[str] = None) -> Inventory:
        # No variant table here, so variant_id is echoed back but not looked up
        product = find_product(self._products, product_id)
        if product is None:
            return Inventory(product_id=product_id, variant_id=variant_id)
        return Inventory(
            product_id=product_id,
            variant_id=variant_id,
            quantity=product.stock_quantity or 0,
            in_stock=product.in_stock,
        )
