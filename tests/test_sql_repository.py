import logging

import pytest
import pytest_asyncio
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.models.product import Product as ProductModel
from storefront.repositories.sql import SqlProductRepository
from storefront.schemas.product import PriceRange
from storefront.schemas.query import ProductFilters

pytestmark = pytest.mark.asyncio


@pytest_asyncio.fixture
async def broken_repository():
    """A repository whose database has no tables, so every query fails."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    yield SqlProductRepository(sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


async def test_rows_carry_images_in_order_and_variant_sizes(build_sql_repository, make_product):
    row = make_product(
        "d1", "Diffuser",
        images=["/img/d1-front.png", "/img/d1-side.png", "/img/d1-back.png"],
        sizes=["100 ml", "250 ml"],
        color="Sand",
    )
    repo = await build_sql_repository([row])

    product = await repo.get_product_by_id("d1")
    assert product.images == ["/img/d1-front.png", "/img/d1-side.png", "/img/d1-back.png"]
    assert product.sizes == ["100 ml", "250 ml"]
    # concrete rows never carry the family color union
    assert product.colors is None


async def test_rows_without_sizes(build_sql_repository, make_product):
    repo = await build_sql_repository([make_product("k1", "Kit", images=[])])

    product = await repo.get_product_by_id("k1")
    assert product.sizes is None
    assert product.images == []


async def test_first_inserted_row_is_the_base(build_sql_repository, make_product):
    # ids sort the other way round from insertion order
    rows = [make_product("z9", "Cube", color="white"), make_product("a1", "Cube", color="black")]
    repo = await build_sql_repository(rows)

    assert await repo.get_base_product_id("a1") == "z9"
    assert [p.id for p in await repo.get_all_products()] == ["z9"]


async def test_variant_inventory(build_sql_repository, make_product):
    repo = await build_sql_repository([make_product("t1", "Tee", sizes=["S", "M"], stock_quantity=7)])

    inventory = await repo.get_inventory("t1", "t1-v1")
    assert inventory.variant_id == "t1-v1"
    assert inventory.quantity == 7
    assert inventory.in_stock is True

    # a variant id from another product is not found
    missing = await repo.get_inventory("other", "t1-v1")
    assert missing.quantity == 0
    assert missing.in_stock is False


async def test_failures_degrade_to_empty_results(broken_repository, caplog):
    repo = broken_repository

    with caplog.at_level(logging.ERROR, logger="storefront.repositories.sql"):
        assert await repo.get_all_products() == []
        assert await repo.get_all_products_with_variants() == []
        assert await repo.get_product_by_id("a1") is None
        assert await repo.get_product_variants("a1") == []
        assert await repo.get_base_product_id("a1") is None
        assert await repo.search_products("cube") == []
        assert await repo.get_new_releases() == []
        assert await repo.get_price_range() == PriceRange()

        inventory = await repo.get_inventory("a1", "a1-s")
        assert inventory.product_id == "a1"
        assert inventory.variant_id == "a1-s"
        assert inventory.quantity == 0

        page = await repo.list_products(page=2, page_size=5)
        assert page.items == []
        assert page.total == 0
        assert page.page == 2
        assert page.page_size == 5

    assert "Catalog query" in caplog.text


async def test_malformed_rows_degrade_to_empty_results(build_sql_repository, session_factory, make_product, caplog):
    repo = await build_sql_repository([make_product("a1", "Cube", color="white")])

    # technical_specs values must be strings, so a stored number no longer validates
    async with session_factory() as session:
        await session.execute(
            update(ProductModel).where(ProductModel.id == "a1").values(technical_specs={"weight": 3})
        )
        await session.commit()

    with caplog.at_level(logging.ERROR, logger="storefront.repositories.sql"):
        assert await repo.get_all_products() == []
        assert await repo.get_product_by_id("a1") is None
        assert await repo.get_product_variants("a1") == []
        assert await repo.search_products("cube") == []

        page = await repo.list_products(page=1, page_size=10)
        assert page.items == []
        assert page.total == 0

    assert "Catalog query get_all_products failed" in caplog.text
    assert "Catalog query list_products failed" in caplog.text


async def test_non_ascii_text_is_matched_in_process(build_sql_repository, make_product):
    rows = [
        make_product("e1", "Élan Vase", category="Premium", subcategory="Céramique"),
        make_product("e2", "Cube"),
    ]
    repo = await build_sql_repository(rows)

    assert [p.id for p in await repo.search_products("élan")] == ["e1"]
    assert [p.id for p in await repo.search_products("ÉLAN")] == ["e1"]
    assert [p.id for p in await repo.get_products_by_subcategory("Women", "CÉRAMIQUE")] == ["e1"]

    page = await repo.list_products(ProductFilters(subcategories=frozenset({"céramique"})))
    assert [p.id for p in page.items] == ["e1"]


async def test_repeated_and_empty_sizes_round_trip(build_sql_repository, make_product):
    rows = [
        make_product("m1", "Tee", sizes=["M", "m", "M"]),
        make_product("k1", "Kit", sizes=[]),
    ]
    repo = await build_sql_repository(rows)

    assert (await repo.get_product_by_id("m1")).sizes == ["M", "m", "M"]
    assert (await repo.get_product_by_id("k1")).sizes is None
