import math
from enum import Enum
from typing import FrozenSet, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SortOption(str, Enum):
    RELEVANCE = "relevance"
    NEWEST = "newest"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    RATING = "rating"

    @classmethod
    def parse(cls, value) -> "SortOption":
        """Unknown or missing values fall back to relevance."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.RELEVANCE


class ProductFilters(BaseModel):
    """Filter state for one query. Empty sets mean no restriction on that dimension."""

    price_range: Tuple[float, float] = (0, math.inf)
    sizes: FrozenSet[str] = frozenset()
    colors: FrozenSet[str] = frozenset()
    categories: FrozenSet[str] = frozenset()
    subcategories: FrozenSet[str] = frozenset()
    in_stock_only: bool = False

    # Public category group ("Women", "Men", ...), expanded via CATEGORY_GROUPS
    category: Optional[str] = None
    brand: Optional[str] = None
    is_new: bool = False
    on_sale: bool = False

    class Config:
        frozen = True


class PaginatedResult(BaseModel, Generic[T]):
    items: List[T] = []
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0
    has_next: bool = False
    has_previous: bool = False
