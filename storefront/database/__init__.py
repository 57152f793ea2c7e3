# Database modules

from .remote import ProductsTable, SupabaseProductsTable
from .memory import InMemoryProductsTable, SAMPLE_PRODUCTS
from .catalog import (
    CatalogStore,
    filter_by_name,
    filter_by_name_or_category,
    catalog_stats,
)
from .carts import CartDatabase, CartSession

__all__ = [
    "ProductsTable",
    "SupabaseProductsTable",
    "InMemoryProductsTable",
    "SAMPLE_PRODUCTS",
    "CatalogStore",
    "filter_by_name",
    "filter_by_name_or_category",
    "catalog_stats",
    "CartDatabase",
    "CartSession",
]
