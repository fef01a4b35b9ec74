# alembic/env.py

import logging
from logging.config import fileConfig
from storefront.db.database import Base
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from storefront.models import product, product_image, product_variant  # noqa: F401
from alembic import context
import os

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

logger = logging.getLogger("alembic.env")

target_metadata = Base.metadata

# Async driver URLs from DATABASE_URL are swapped for their sync counterparts
SYNC_DRIVERS = {
    "mysql+aiomysql://": "mysql+pymysql://",
    "mysql+asyncmy://": "mysql+pymysql://",
    "sqlite+aiosqlite://": "sqlite://",
}

database_url = os.environ.get("DATABASE_URL")

if database_url:
    for async_prefix, sync_prefix in SYNC_DRIVERS.items():
        database_url = database_url.replace(async_prefix, sync_prefix)
    config.set_main_option('sqlalchemy.url', database_url)
    logger.info("Using DATABASE_URL for migrations")
else:
    logger.info("Using alembic.ini URL for migrations")


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
