# storefront/core/query.py

"""Pure filtering, sorting and pagination over catalog rows.

Nothing here does I/O. Both catalog backends run their results through these
functions so a query means the same thing whichever backend answers it.
"""

import math
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from storefront.schemas.product import Product
from storefront.schemas.query import PaginatedResult, ProductFilters, SortOption

# Public category group -> underlying category values
CATEGORY_GROUPS: Dict[str, FrozenSet[str]] = {
    "women": frozenset({"Geometric", "Abstract", "Premium"}),
    "men": frozenset({"Modular", "Sets"}),
    "accessories": frozenset({"Geometric", "Abstract", "Modular"}),
}


def category_values(group: Optional[str]) -> FrozenSet[str]:
    """Underlying categories for a public group. Empty means "no restriction"."""
    if not group:
        return frozenset()
    return CATEGORY_GROUPS.get(group.strip().lower(), frozenset())


def clamp_page(page: Optional[int]) -> int:
    if page is None or page < 1:
        return 1
    return page


def clamp_page_size(page_size: int) -> int:
    return max(1, page_size)


def clamp_limit(limit: Optional[int]) -> Optional[int]:
    if limit is None:
        return None
    return max(0, limit)


def matches_filters(product: Product, filters: ProductFilters) -> bool:
    low, high = filters.price_range
    if not (low <= product.price <= high):
        return False

    if filters.sizes and not any(size in filters.sizes for size in product.sizes or []):
        return False

    if filters.colors and product.color not in filters.colors:
        return False

    if filters.categories and product.category not in filters.categories:
        return False

    if filters.subcategories:
        wanted = {s.lower() for s in filters.subcategories}
        if product.subcategory.lower() not in wanted:
            return False

    if filters.in_stock_only and not product.in_stock:
        return False

    group = category_values(filters.category)
    if group and product.category not in group:
        return False

    if filters.brand is not None and product.brand != filters.brand:
        return False

    if filters.is_new and not product.is_new:
        return False

    if filters.on_sale and not product.is_on_sale:
        return False

    return True


def apply_filters(products: Iterable[Product], filters: Optional[ProductFilters]) -> List[Product]:
    if filters is None:
        return list(products)
    return [p for p in products if matches_filters(p, filters)]


def sort_products(products: Iterable[Product], sort=SortOption.RELEVANCE) -> List[Product]:
    """Stable sort. Relevance and newest keep the incoming order."""
    sort = SortOption.parse(sort)
    items = list(products)

    if sort == SortOption.PRICE_ASC:
        return sorted(items, key=lambda p: p.price)
    if sort == SortOption.PRICE_DESC:
        return sorted(items, key=lambda p: p.price, reverse=True)
    if sort == SortOption.NAME_ASC:
        return sorted(items, key=lambda p: p.name)
    if sort == SortOption.NAME_DESC:
        return sorted(items, key=lambda p: p.name, reverse=True)
    if sort == SortOption.RATING:
        return sorted(items, key=lambda p: p.rating or 0, reverse=True)
    return items


def paginate(items: Sequence[Product], page: int = 1, page_size: Optional[int] = None) -> PaginatedResult[Product]:
    total = len(items)

    # No page size: everything on a single page
    if page_size is None:
        return PaginatedResult[Product](
            items=list(items),
            total=total,
            page=1,
            page_size=total,
            total_pages=1 if total else 0,
            has_next=False,
            has_previous=False,
        )

    page = clamp_page(page)
    page_size = clamp_page_size(page_size)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size

    return PaginatedResult[Product](
        items=list(items[start:start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_previous=page > 1,
    )


def empty_page(page: int = 1, page_size: Optional[int] = None) -> PaginatedResult[Product]:
    return PaginatedResult[Product](
        items=[],
        total=0,
        page=clamp_page(page),
        page_size=clamp_page_size(page_size) if page_size is not None else 0,
        total_pages=0,
        has_next=False,
        has_previous=False,
    )


def matches_search(product: Product, query: str) -> bool:
    needle = query.lower()
    haystacks = (product.name, product.category, product.subcategory, product.short_description or "")
    return any(needle in text.lower() for text in haystacks)
