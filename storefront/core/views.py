# storefront/core/views.py

"""Listing views shared by the catalog backends.

Each function takes concrete rows in catalog order and returns family
representatives, so a backend only has to fetch rows (optionally narrowed in
storage) and hand them over.
"""

from typing import Iterable, List, Optional, Sequence

from storefront.core.query import (
    apply_filters,
    category_values,
    clamp_limit,
    matches_search,
    paginate,
    sort_products,
)
from storefront.core.variants import deduplicate_products
from storefront.schemas.product import PriceRange, Product
from storefront.schemas.query import PaginatedResult, ProductFilters

# Rows shown by the "new releases" sections when nothing is flagged new
NEW_RELEASES_FALLBACK_SIZE = 12


def _take(products: List[Product], limit: Optional[int]) -> List[Product]:
    limit = clamp_limit(limit)
    return products if limit is None else products[:limit]


def list_page(
    products: Iterable[Product],
    filters: Optional[ProductFilters] = None,
    sort=None,
    page: int = 1,
    page_size: Optional[int] = None,
) -> PaginatedResult[Product]:
    # filter concrete rows -> one row per family -> sort -> page
    families = deduplicate_products(apply_filters(products, filters))
    return paginate(sort_products(families, sort), page, page_size)


def by_subcategory(products: Iterable[Product], category: str, subcategory: Optional[str] = None) -> List[Product]:
    group = category_values(category)
    rows = [p for p in products if not group or p.category in group]
    if subcategory:
        rows = [p for p in rows if p.subcategory.lower() == subcategory.lower()]
    return deduplicate_products(rows)


def featured(products: Iterable[Product], limit: Optional[int] = 8) -> List[Product]:
    rows = [p for p in products if p.is_best_seller or p.is_new]
    return _take(deduplicate_products(rows), limit)


def new_arrivals(products: Iterable[Product], limit: Optional[int] = 4) -> List[Product]:
    rows = [p for p in products if p.is_new]
    return _take(deduplicate_products(rows), limit)


def new_releases(products: Sequence[Product], limit: Optional[int] = None) -> List[Product]:
    rows = [p for p in products if p.is_new]
    if not rows:
        # Never leave the section empty: fall back to an id-ordered slice
        limit = clamp_limit(limit)
        size = limit if limit else NEW_RELEASES_FALLBACK_SIZE
        rows = sorted(products, key=lambda p: p.id)[:size]
    return _take(deduplicate_products(rows), limit)


def new_releases_by_category(products: Sequence[Product], category: str, limit: Optional[int] = None) -> List[Product]:
    group = category_values(category)
    rows = [p for p in products if not group or p.category in group]
    return new_releases(rows, limit)


def sale(products: Iterable[Product]) -> List[Product]:
    return deduplicate_products(p for p in products if p.is_on_sale)


def search(products: Iterable[Product], query: str, limit: Optional[int] = 20) -> List[Product]:
    rows = [p for p in products if matches_search(p, query)]
    return _take(deduplicate_products(rows), limit)


def price_range(products: Iterable[Product], product_ids: Optional[Iterable[str]] = None) -> PriceRange:
    if product_ids is not None:
        wanted = set(product_ids)
        products = [p for p in products if p.id in wanted]
    prices = [p.price for p in products]
    if not prices:
        return PriceRange()
    return PriceRange(min=min(prices), max=max(prices))
