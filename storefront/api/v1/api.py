# storefront/api/v1/api.py

from fastapi import APIRouter
from storefront.api.v1.endpoints import products

api_router = APIRouter()

# catalog routes
api_router.include_router(products.router, prefix="/products", tags=["products"])
