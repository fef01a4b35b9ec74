from pydantic import BaseModel, field_validator
from typing import Dict, List, Optional


# 1. Catalog row (one per color/size combination, not per family)
class Product(BaseModel):
    id: str
    name: str
    brand: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    image: str
    images: List[str] = []
    category: str
    subcategory: str

    # Variant-bearing fields
    color: Optional[str] = None
    colors: Optional[List[str]] = None  # family union, representatives only
    sizes: Optional[List[str]] = None

    # Stock and reviews
    in_stock: bool = True
    stock_quantity: Optional[int] = None
    store_available: Optional[bool] = None
    rating: Optional[float] = None
    review_count: Optional[int] = None

    # Marketing flags
    is_new: bool = False
    is_best_seller: bool = False
    is_online_only: bool = False
    is_limited_edition: bool = False

    variants: Optional[int] = None
    sku: Optional[str] = None
    short_description: Optional[str] = None
    discount_percentage: Optional[int] = None
    promotional_message: Optional[str] = None

    # Detail page fields
    description: Optional[str] = None
    key_benefits: Optional[List[str]] = None
    ingredients: Optional[List[str]] = None
    usage_instructions: Optional[List[str]] = None
    care_instructions: Optional[List[str]] = None
    technical_specs: Optional[Dict[str, str]] = None
    scents: Optional[List[str]] = None
    capacities: Optional[List[str]] = None
    delivery_estimate: Optional[str] = None
    returns_policy: Optional[str] = None
    warranty: Optional[str] = None
    videos: Optional[List[str]] = None

    class Config:
        from_attributes = True
        frozen = True

    @field_validator("sizes")
    @classmethod
    def empty_sizes_to_none(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """A row with no sizes and a row with an empty size list are the same row."""
        return v or None

    @property
    def is_on_sale(self) -> bool:
        return self.original_price is not None


# 2. Price bounds for a set of products
class PriceRange(BaseModel):
    min: float = 0
    max: float = 1000


# 3. Stock level for a product or one of its variant rows
class Inventory(BaseModel):
    product_id: str
    variant_id: Optional[str] = None
    quantity: int = 0
    low_stock_threshold: int = 10
    in_stock: bool = False


# 4. Detail view payload
class ProductDetail(BaseModel):
    product: Product
    variants: List[Product] = []
    selected: Dict[str, str] = {}
    base_id: str
