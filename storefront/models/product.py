from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text, func
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON
from storefront.db.database import Base

class Product(Base):
    __tablename__ = "products"

    # One row per concrete color/size combination
    id = Column(String(64), primary_key=True)
    # Catalog enumeration order; the first row of a family is its base product
    position = Column(Integer, nullable=False, default=0, index=True)
    name = Column(String(255), index=True, nullable=False)
    brand = Column(String(100), nullable=True)

    price = Column(Float, nullable=False)
    original_price = Column(Float, nullable=True)
    image = Column(String(1000), nullable=False)

    category = Column(String(50), index=True, nullable=False)
    subcategory = Column(String(50), index=True, nullable=False)
    color = Column(String(50), nullable=True)

    in_stock = Column(Boolean, nullable=False, default=True)
    stock_quantity = Column(Integer, nullable=True)
    store_available = Column(Boolean, nullable=True)
    rating = Column(Float, nullable=True)
    review_count = Column(Integer, nullable=True)

    is_new = Column(Boolean, nullable=False, default=False)
    is_best_seller = Column(Boolean, nullable=False, default=False)
    is_online_only = Column(Boolean, nullable=False, default=False)
    is_limited_edition = Column(Boolean, nullable=False, default=False)

    variants = Column(Integer, nullable=True)
    sku = Column(String(64), nullable=True)
    short_description = Column(String(500), nullable=True)
    discount_percentage = Column(Integer, nullable=True)
    promotional_message = Column(String(255), nullable=True)

    # Detail page content
    description = Column(Text, nullable=True)
    key_benefits = Column(JSON, nullable=True)
    ingredients = Column(JSON, nullable=True)
    usage_instructions = Column(JSON, nullable=True)
    care_instructions = Column(JSON, nullable=True)
    technical_specs = Column(JSON, nullable=True)
    scents = Column(JSON, nullable=True)
    capacities = Column(JSON, nullable=True)
    delivery_estimate = Column(String(255), nullable=True)
    returns_policy = Column(String(255), nullable=True)
    warranty = Column(String(255), nullable=True)
    videos = Column(JSON, nullable=True)

    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    images = relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.image_order",
        cascade="all, delete-orphan",
    )
    variant_rows = relationship(
        "ProductVariant",
        back_populates="product",
        order_by="ProductVariant.position",
        cascade="all, delete-orphan",
    )
