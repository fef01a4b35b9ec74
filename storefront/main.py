# storefront/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.v1.api import api_router
from storefront.core.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(
    title="Storefront Catalog API"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router, prefix="/api/v1")

@app.get("/")
def read_root():
    return {"message": "Welcome to the Storefront Catalog API"}
