# storefront/api/v1/endpoints/products.py

from typing import List, Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse

from storefront.core.variants import OPTION_KEYS, resolve_current_variant, variant_selection
from storefront.repositories.base import ProductRepository
from storefront.repositories.selector import get_product_repository
from storefront.schemas.product import Inventory, PriceRange, Product, ProductDetail
from storefront.schemas.query import PaginatedResult, ProductFilters, SortOption

router = APIRouter()


def get_repository() -> ProductRepository:
    return get_product_repository()


def _requested_selection(request: Request) -> dict:
    selection = {}
    for key in OPTION_KEYS:
        value = request.query_params.get(key)
        if value:
            selection[key] = value
    return selection


# 1. Listing with filters, sort and pagination
@router.get("/", response_model=PaginatedResult[Product])
async def list_products(
    category: Optional[str] = None,
    subcategory: Optional[str] = None,
    min_price: float = 0,
    max_price: Optional[float] = None,
    sizes: List[str] = Query(default=[]),
    colors: List[str] = Query(default=[]),
    categories: List[str] = Query(default=[]),
    subcategories: List[str] = Query(default=[]),
    in_stock_only: bool = False,
    brand: Optional[str] = None,
    is_new: bool = False,
    on_sale: bool = False,
    sort: str = SortOption.RELEVANCE.value,
    page: int = 1,
    page_size: Optional[int] = None,
    repo: ProductRepository = Depends(get_repository),
):
    if subcategory:
        subcategories = subcategories + [subcategory]

    filters = ProductFilters(
        price_range=(min_price, max_price if max_price is not None else float("inf")),
        sizes=frozenset(sizes),
        colors=frozenset(colors),
        categories=frozenset(categories),
        subcategories=frozenset(subcategories),
        in_stock_only=in_stock_only,
        category=category,
        brand=brand,
        is_new=is_new,
        on_sale=on_sale,
    )
    return await repo.list_products(filters, SortOption.parse(sort), page, page_size)


# 2. Family lists
@router.get("/all", response_model=List[Product])
async def read_all_products(repo: ProductRepository = Depends(get_repository)):
    return await repo.get_all_products()


@router.get("/variants", response_model=List[Product])
async def read_all_variants(repo: ProductRepository = Depends(get_repository)):
    return await repo.get_all_products_with_variants()


@router.get("/search", response_model=List[Product])
async def search_products(q: str = "", limit: int = 20, repo: ProductRepository = Depends(get_repository)):
    return await repo.search_products(q.strip(), limit)


@router.get("/featured", response_model=List[Product])
async def read_featured(limit: int = 8, repo: ProductRepository = Depends(get_repository)):
    return await repo.get_featured_products(limit)


@router.get("/new-arrivals", response_model=List[Product])
async def read_new_arrivals(limit: int = 4, repo: ProductRepository = Depends(get_repository)):
    return await repo.get_new_arrivals(limit)


@router.get("/new-releases", response_model=List[Product])
async def read_new_releases(
    category: Optional[str] = None,
    limit: Optional[int] = None,
    repo: ProductRepository = Depends(get_repository),
):
    if category:
        return await repo.get_new_releases_by_category(category, limit)
    return await repo.get_new_releases(limit)


@router.get("/sale", response_model=List[Product])
async def read_sale(repo: ProductRepository = Depends(get_repository)):
    return await repo.get_sale_products()


@router.get("/price-range", response_model=PriceRange)
async def read_price_range(
    ids: Optional[List[str]] = Query(default=None),
    repo: ProductRepository = Depends(get_repository),
):
    return await repo.get_price_range(ids)


@router.get("/categories/{category}", response_model=List[Product])
async def read_category(
    category: str,
    subcategory: Optional[str] = None,
    repo: ProductRepository = Depends(get_repository),
):
    return await repo.get_products_by_subcategory(category, subcategory)


# 3. Product detail
@router.get("/{product_id}", response_model=ProductDetail)
async def read_product(
    product_id: str,
    request: Request,
    repo: ProductRepository = Depends(get_repository),
):
    product = await repo.get_product_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")

    requested = _requested_selection(request)
    base_id = await repo.get_base_product_id(product_id) or product_id

    # Variant ids redirect to the family's base id, keeping the chosen options in the URL
    if base_id != product_id:
        params = {**variant_selection(product), **dict(request.query_params)}
        url = str(request.url_for("read_product", product_id=base_id))
        if params:
            url = f"{url}?{urlencode(params)}"
        return RedirectResponse(url=url, status_code=307)

    variants = await repo.get_product_variants(base_id)
    current = resolve_current_variant(variants, requested, product) if requested else product
    return ProductDetail(
        product=current,
        variants=variants,
        selected=variant_selection(current),
        base_id=base_id,
    )


@router.get("/{product_id}/variants", response_model=List[Product])
async def read_product_variants(product_id: str, repo: ProductRepository = Depends(get_repository)):
    return await repo.get_product_variants(product_id)


@router.get("/{product_id}/base")
async def read_base_product_id(product_id: str, repo: ProductRepository = Depends(get_repository)):
    base_id = await repo.get_base_product_id(product_id)
    if base_id is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"product_id": product_id, "base_id": base_id}


@router.get("/{product_id}/inventory", response_model=Inventory)
async def read_inventory(
    product_id: str,
    variant_id: Optional[str] = None,
    repo: ProductRepository = Depends(get_repository),
):
    return await repo.get_inventory(product_id, variant_id)
