# storefront/repositories/base.py

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from storefront.schemas.product import Inventory, PriceRange, Product
from storefront.schemas.query import PaginatedResult, ProductFilters, SortOption


@runtime_checkable
class ProductRepository(Protocol):
    """Read-only catalog contract shared by every backend.

    Listing methods return one representative per product family; detail
    methods return concrete rows. A missing row is None or an empty list,
    never an exception.
    """

    async def get_all_products(self) -> List[Product]:
        """Family representatives for the whole catalog."""
        ...

    async def get_all_products_with_variants(self) -> List[Product]:
        """Every concrete row, undeduplicated."""
        ...

    async def get_product_by_id(self, product_id: str) -> Optional[Product]:
        ...

    async def get_products_by_subcategory(self, category: str, subcategory: Optional[str] = None) -> List[Product]:
        ...

    async def list_products(
        self,
        filters: Optional[ProductFilters] = None,
        sort: SortOption = SortOption.RELEVANCE,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PaginatedResult[Product]:
        ...

    async def get_featured_products(self, limit: Optional[int] = 8) -> List[Product]:
        ...

    async def get_new_arrivals(self, limit: Optional[int] = 4) -> List[Product]:
        ...

    async def get_new_releases(self, limit: Optional[int] = None) -> List[Product]:
        ...

    async def get_new_releases_by_category(self, category: str, limit: Optional[int] = None) -> List[Product]:
        ...

    async def get_sale_products(self) -> List[Product]:
        ...

    async def search_products(self, query: str, limit: Optional[int] = 20) -> List[Product]:
        ...

    async def get_product_variants(self, base_product_id: str) -> List[Product]:
        """Concrete rows in the same family as base_product_id."""
        ...

    async def get_base_product_id(self, product_id: str) -> Optional[str]:
        """Id of the family's first row."""
        ...

    async def get_price_range(self, product_ids: Optional[Iterable[str]] = None) -> PriceRange:
        ...

    async def get_inventory(self, product_id: str, variant_id: Optional[str] = None) -> Inventory:
        ...
