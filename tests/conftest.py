"""Shared fixtures: catalog rows and both repository backends."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.database import Base
from storefront.repositories.memory import InMemoryProductRepository
from storefront.repositories.sql import SqlProductRepository
from storefront.schemas.product import Product
from storefront.seed import seed_catalog


def build_product(id, name, **fields):
    values = {
        "price": 10.0,
        "image": f"/images/{id}.png",
        "category": "Geometric",
        "subcategory": "Cubes",
    }
    values.update(fields)
    return Product(id=id, name=name, **values)


@pytest.fixture
def make_product():
    return build_product


@pytest.fixture
def cube_catalog():
    return [
        build_product("a1", "Cube", color="white"),
        build_product("a2", "Cube", color="black"),
        build_product("b1", "Sphere", color="red"),
    ]


@pytest.fixture
def priced_catalog():
    return [
        build_product(f"p{price}", f"Item {price}", price=float(price))
        for price in (30, 60, 70, 90, 120)
    ]


@pytest_asyncio.fixture
async def sql_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(sql_engine):
    return sessionmaker(bind=sql_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def build_sql_repository(session_factory):
    async def build(products):
        await seed_catalog(session_factory, products)
        return SqlProductRepository(session_factory)
    return build


@pytest.fixture(params=["memory", "sql"])
def build_repository(request, build_sql_repository):
    """Build either backend over the same rows; tests run once per backend."""
    async def build(products):
        if request.param == "memory":
            return InMemoryProductRepository(products)
        return await build_sql_repository(products)
    return build
