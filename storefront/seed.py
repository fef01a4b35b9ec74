# storefront/seed.py

"""Load the fixture catalog into the relational tables.

    DATABASE_URL=... python -m storefront.seed
"""

import asyncio
import logging
from typing import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from storefront.db.database import AsyncSessionLocal
from storefront.models.product import Product as ProductModel
from storefront.models.product_image import ProductImage
from storefront.models.product_variant import ProductVariant
from storefront.repositories.memory import load_catalog
from storefront.repositories.sql import _PRODUCT_COLUMNS
from storefront.schemas.product import Product

logger = logging.getLogger(__name__)


def to_table_row(product: Product, position: int) -> ProductModel:
    """A products row plus its image rows and one variant row per size."""
    row = ProductModel(position=position, **{column: getattr(product, column) for column in _PRODUCT_COLUMNS})
    row.images = [ProductImage(image_url=url, image_order=i) for i, url in enumerate(product.images)]

    # rows without sizes still get a single default variant; ids are positional so
    # repeated sizes ("M", "m", "M") never collide
    sizes = product.sizes or [None]
    row.variant_rows = [
        ProductVariant(
            id=f"{product.id}-v{i}",
            position=i,
            color=product.color,
            size=size,
            sku=product.sku,
            price=product.price,
            original_price=product.original_price,
            stock_quantity=product.stock_quantity,
            in_stock=product.in_stock,
            image=product.image,
        )
        for i, size in enumerate(sizes)
    ]
    return row


async def seed_catalog(session_factory, products: Iterable[Product]) -> int:
    """Insert products in catalog order. Skips everything if the table already has rows."""
    products = list(products)
    async with session_factory() as session:
        result = await session.execute(select(ProductModel.id).limit(1))
        if result.scalars().first():
            logger.info("Catalog tables already populated, skipping seed")
            return 0

        session.add_all([to_table_row(product, i) for i, product in enumerate(products)])
        try:
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            logger.exception("Seeding the catalog failed")
            raise

    logger.info("Seeded %d catalog rows", len(products))
    return len(products)


async def main():
    logger.info("Seeding catalog tables...")
    await seed_catalog(AsyncSessionLocal, load_catalog())
    logger.info("Done.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
