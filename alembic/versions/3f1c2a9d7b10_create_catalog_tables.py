"""create_catalog_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-17 10:02:11.412907

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - products, product_images, product_variants"""
    op.create_table(
        'products',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('brand', sa.String(length=100), nullable=True),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.Column('image', sa.String(length=1000), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('subcategory', sa.String(length=50), nullable=False),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('in_stock', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('stock_quantity', sa.Integer(), nullable=True),
        sa.Column('store_available', sa.Boolean(), nullable=True),
        sa.Column('rating', sa.Float(), nullable=True),
        sa.Column('review_count', sa.Integer(), nullable=True),
        sa.Column('is_new', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_best_seller', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_online_only', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_limited_edition', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('variants', sa.Integer(), nullable=True),
        sa.Column('sku', sa.String(length=64), nullable=True),
        sa.Column('short_description', sa.String(length=500), nullable=True),
        sa.Column('discount_percentage', sa.Integer(), nullable=True),
        sa.Column('promotional_message', sa.String(length=255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('key_benefits', sa.JSON(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=True),
        sa.Column('usage_instructions', sa.JSON(), nullable=True),
        sa.Column('care_instructions', sa.JSON(), nullable=True),
        sa.Column('technical_specs', sa.JSON(), nullable=True),
        sa.Column('scents', sa.JSON(), nullable=True),
        sa.Column('capacities', sa.JSON(), nullable=True),
        sa.Column('delivery_estimate', sa.String(length=255), nullable=True),
        sa.Column('returns_policy', sa.String(length=255), nullable=True),
        sa.Column('warranty', sa.String(length=255), nullable=True),
        sa.Column('videos', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
    )
    op.create_index('ix_products_position', 'products', ['position'])
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_subcategory', 'products', ['subcategory'])

    op.create_table(
        'product_images',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('product_id', sa.String(length=64), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('image_url', sa.String(length=1000), nullable=False),
        sa.Column('image_order', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_product_images_product_id', 'product_images', ['product_id'])

    op.create_table(
        'product_variants',
        sa.Column('id', sa.String(length=128), primary_key=True),
        sa.Column('product_id', sa.String(length=64), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('color', sa.String(length=50), nullable=True),
        sa.Column('size', sa.String(length=50), nullable=True),
        sa.Column('sku', sa.String(length=64), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column('original_price', sa.Float(), nullable=True),
        sa.Column('stock_quantity', sa.Integer(), nullable=True),
        sa.Column('in_stock', sa.Boolean(), nullable=True),
        sa.Column('image', sa.String(length=1000), nullable=True),
    )
    op.create_index('ix_product_variants_product_id', 'product_variants', ['product_id'])


def downgrade() -> None:
    """Downgrade schema - drop catalog tables"""
    op.drop_index('ix_product_variants_product_id', table_name='product_variants')
    op.drop_table('product_variants')
    op.drop_index('ix_product_images_product_id', table_name='product_images')
    op.drop_table('product_images')
    op.drop_index('ix_products_subcategory', table_name='products')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_index('ix_products_name', table_name='products')
    op.drop_index('ix_products_position', table_name='products')
    op.drop_table('products')
