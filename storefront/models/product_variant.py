# storefront/models/product_variant.py

from sqlalchemy import Boolean, Column, Float, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from storefront.db.database import Base

class ProductVariant(Base):
    """Purchasable option rows (color/size) hanging off one products row.

    This is separate from the family grouping, which is by product name.
    """
    __tablename__ = "product_variants"

    id = Column(String(128), primary_key=True)
    product_id = Column(String(64), ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    color = Column(String(50), nullable=True)
    size = Column(String(50), nullable=True)
    sku = Column(String(64), nullable=True)
    price = Column(Float, nullable=True)
    original_price = Column(Float, nullable=True)
    stock_quantity = Column(Integer, nullable=True)
    in_stock = Column(Boolean, nullable=True)
    image = Column(String(1000), nullable=True)

    product = relationship("Product", back_populates="variant_rows")
