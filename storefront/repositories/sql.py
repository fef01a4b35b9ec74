# storefront/repositories/sql.py

"""Relational catalog backend.

Rows live in three tables (products, product_images, product_variants). Every
read joins them back into the Product schema and then runs the same in-process
family grouping, filtering, sorting and pagination as the in-memory backend.
Column filters are pushed into SQL only to narrow the fetch, and only where the
database can over-match but never under-match; text that needs case folding is
left to the in-process filters.
"""

import functools
import logging
import math
from typing import Iterable, List, Optional

from pydantic import ValidationError
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from storefront.core import views
from storefront.core.query import category_values, empty_page
from storefront.core.variants import deduplicate_products, family_variants, find_product, resolve_base_id
from storefront.models.product import Product as ProductModel
from storefront.models.product_image import ProductImage  # noqa: F401 (mapper registry)
from storefront.models.product_variant import ProductVariant
from storefront.schemas.product import Inventory, PriceRange, Product
from storefront.schemas.query import PaginatedResult, ProductFilters, SortOption

logger = logging.getLogger(__name__)

# Storage errors plus rows that no longer validate as a Product
READ_FAILURES = (SQLAlchemyError, OSError, ValidationError)

# Columns copied straight from a products row into the Product schema
_PRODUCT_COLUMNS = (
    "id", "name", "brand", "price", "original_price", "image", "category", "subcategory",
    "color", "in_stock", "stock_quantity", "store_available", "rating", "review_count",
    "is_new", "is_best_seller", "is_online_only", "is_limited_edition", "variants", "sku",
    "short_description", "discount_percentage", "promotional_message", "description",
    "key_benefits", "ingredients", "usage_instructions", "care_instructions", "technical_specs",
    "scents", "capacities", "delivery_estimate", "returns_policy", "warranty", "videos",
)


def to_product(row: ProductModel) -> Product:
    """Map a products row (with images and variant rows loaded) to the Product schema."""
    data = {column: getattr(row, column) for column in _PRODUCT_COLUMNS}

    data["images"] = [image.image_url for image in row.images]

    # one variant row per listed size, in list order; a sizeless row has size NULL
    data["sizes"] = [variant.size for variant in row.variant_rows if variant.size is not None]

    # The family color union is computed by deduplication, not stored per row
    data["colors"] = None
    return Product.model_validate(data)


def degrade(default):
    """Turn database failures and malformed rows into the method's empty result and log them."""
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            try:
                return await method(self, *args, **kwargs)
            except READ_FAILURES:
                logger.exception("Catalog query %s failed", method.__name__)
                return default(*args, **kwargs)
        return wrapper
    return decorator


def _empty_list(*args, **kwargs):
    return []


def _nothing(*args, **kwargs):
    return None


class SqlProductRepository:

    def __init__(self, session_factory):
        self._session_factory = session_factory

    # --- helpers ---

    @staticmethod
    def _select(*criteria):
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.images), selectinload(ProductModel.variant_rows))
            .order_by(ProductModel.position, ProductModel.id)
        )
        if criteria:
            stmt = stmt.filter(*criteria)
        return stmt

    async def _fetch(self, *criteria) -> List[Product]:
        async with self._session_factory() as session:
            result = await session.execute(self._select(*criteria))
            return [to_product(row) for row in result.scalars().all()]

    async def _family_rows(self, product_id: str) -> List[Product]:
        async with self._session_factory() as session:
            name = (
                await session.execute(select(ProductModel.name).filter(ProductModel.id == product_id))
            ).scalar_one_or_none()
        if name is None:
            return []
        return await self._fetch(ProductModel.name == name)

    @staticmethod
    def _filter_criteria(filters: Optional[ProductFilters]):
        if filters is None:
            return []

        low, high = filters.price_range
        criteria = [ProductModel.price >= low]
        if not math.isinf(high):
            criteria.append(ProductModel.price <= high)

        if filters.colors:
            criteria.append(ProductModel.color.in_(sorted(filters.colors)))
        if filters.categories:
            criteria.append(ProductModel.category.in_(sorted(filters.categories)))
        if filters.in_stock_only:
            criteria.append(ProductModel.in_stock.is_(True))

        group = category_values(filters.category)
        if group:
            criteria.append(ProductModel.category.in_(sorted(group)))
        if filters.brand is not None:
            criteria.append(ProductModel.brand == filters.brand)
        if filters.is_new:
            criteria.append(ProductModel.is_new.is_(True))
        if filters.on_sale:
            criteria.append(ProductModel.original_price.isnot(None))

        # sizes (product_variants) and subcategories (case-insensitive) are matched in process
        return criteria

    # --- ProductRepository ---

    @degrade(_empty_list)
    async def get_all_products(self) -> List[Product]:
        return deduplicate_products(await self._fetch())

    @degrade(_empty_list)
    async def get_all_products_with_variants(self) -> List[Product]:
        return await self._fetch()

    @degrade(_nothing)
    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        # a case-insensitive collation can return "A1" for "a1"
        return find_product(await self._fetch(ProductModel.id == product_id), product_id)

    @degrade(_empty_list)
    async def get_products_by_subcategory(self, category: str, subcategory: Optional[str] = None) -> List[Product]:
        group = category_values(category)
        criteria = [ProductModel.category.in_(sorted(group))] if group else []
        return views.by_subcategory(await self._fetch(*criteria), category, subcategory)

    async def list_products(
        self,
        filters: Optional[ProductFilters] = None,
        sort: SortOption = SortOption.RELEVANCE,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PaginatedResult[Product]:
        try:
            rows = await self._fetch(*self._filter_criteria(filters))
        except READ_FAILURES:
            logger.exception("Catalog query list_products failed")
            return empty_page(page, page_size)
        return views.list_page(rows, filters, sort, page, page_size)

    @degrade(_empty_list)
    async def get_featured_products(self, limit: Optional[int] = 8) -> List[Product]:
        rows = await self._fetch(or_(ProductModel.is_best_seller.is_(True), ProductModel.is_new.is_(True)))
        return views.featured(rows, limit)

    @degrade(_empty_list)
    async def get_new_arrivals(self, limit: Optional[int] = 4) -> List[Product]:
        return views.new_arrivals(await self._fetch(ProductModel.is_new.is_(True)), limit)

    @degrade(_empty_list)
    async def get_new_releases(self, limit: Optional[int] = None) -> List[Product]:
        rows = await self._fetch(ProductModel.is_new.is_(True))
        if not rows:
            # the fallback slice is taken from the whole catalog
            rows = await self._fetch()
        return views.new_releases(rows, limit)

    @degrade(_empty_list)
    async def get_new_releases_by_category(self, category: str, limit: Optional[int] = None) -> List[Product]:
        group = category_values(category)
        criteria = [ProductModel.category.in_(sorted(group))] if group else []
        return views.new_releases_by_category(await self._fetch(*criteria), category, limit)

    @degrade(_empty_list)
    async def get_sale_products(self) -> List[Product]:
        return views.sale(await self._fetch(ProductModel.original_price.isnot(None)))

    @degrade(_empty_list)
    async def search_products(self, query: str, limit: Optional[int] = 20) -> List[Product]:
        # SQL lower() folds ASCII only, so matching happens in process
        return views.search(await self._fetch(), query, limit)

    @degrade(_empty_list)
    async def get_product_variants(self, base_product_id: str) -> List[Product]:
        return family_variants(await self._family_rows(base_product_id), base_product_id)

    @degrade(_nothing)
    async def get_base_product_id(self, product_id: str) -> Optional[str]:
        return resolve_base_id(await self._family_rows(product_id), product_id)

    @degrade(lambda *args, **kwargs: PriceRange())
    async def get_price_range(self, product_ids: Optional[Iterable[str]] = None) -> PriceRange:
        stmt = select(func.min(ProductModel.price), func.max(ProductModel.price))
        if product_ids is not None:
            ids = list(product_ids)
            if not ids:
                return PriceRange()
            stmt = stmt.filter(ProductModel.id.in_(ids))

        async with self._session_factory() as session:
            low, high = (await session.execute(stmt)).one()
        if low is None:
            return PriceRange()
        return PriceRange(min=low, max=high)

    @degrade(lambda product_id, variant_id=None: Inventory(product_id=product_id, variant_id=variant_id))
    async def get_inventory(self, product_id: str, variant_id: Optional[str] = None) -> Inventory:
        async with self._session_factory() as session:
            if variant_id:
                row = (
                    await session.execute(
                        select(ProductVariant.stock_quantity, ProductVariant.in_stock).filter(
                            ProductVariant.id == variant_id, ProductVariant.product_id == product_id
                        )
                    )
                ).one_or_none()
            else:
                row = (
                    await session.execute(
                        select(ProductModel.stock_quantity, ProductModel.in_stock).filter(ProductModel.id == product_id)
                    )
                ).one_or_none()

        if row is None:
            return Inventory(product_id=product_id, variant_id=variant_id)
        quantity, in_stock = row
        return Inventory(
            product_id=product_id,
            variant_id=variant_id,
            quantity=quantity or 0,
            in_stock=bool(in_stock),
        )
