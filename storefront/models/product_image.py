# storefront/models/product_image.py

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from storefront.db.database import Base

class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, autoincrement=True)

    product_id = Column(String(64), ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False)
    image_url = Column(String(1000), nullable=False)
    # Gallery position, lowest first
    image_order = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="images")
