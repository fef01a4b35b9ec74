from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from storefront.core.config import DATABASE_URL, SQL_ECHO


def _connect_args(url: str) -> dict:
    # MySQL needs the charset spelled out for product names outside latin-1
    if url.startswith("mysql"):
        return {"charset": "utf8mb4", "use_unicode": True}
    return {}


engine = create_async_engine(
    DATABASE_URL,
    echo=SQL_ECHO,
    connect_args=_connect_args(DATABASE_URL),
    pool_pre_ping=True
)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()
