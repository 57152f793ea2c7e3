"""FastAPI dependencies resolving the shared catalog and cart storage"""

from fastapi import Request

from .database.catalog import CatalogStore
from .database.carts import CartDatabase


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


def get_cart_db(request: Request) -> CartDatabase:
    return request.app.state.cart_db
