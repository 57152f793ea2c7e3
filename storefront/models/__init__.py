# Storefront Models

from .product import (
    Product,
    ProductCategory,
    ProductFields,
    ProductCreate,
    ProductListing,
    ProductSearchResponse,
    AdminProductListResponse,
    ProductResponse,
    parse_product_fields,
)
from .cart import (
    Cart,
    CartLine,
    CartState,
    AddToCartRequest,
    UpdateCartItemRequest,
    CartLineView,
    CartView,
    CartResponse,
)
from .catalog import CatalogEvent, CatalogEventKind, CatalogStats

__all__ = [
    "Product",
    "ProductCategory",
    "ProductFields",
    "ProductCreate",
    "ProductListing",
    "ProductSearchResponse",
    "AdminProductListResponse",
    "ProductResponse",
    "parse_product_fields",
    "Cart",
    "CartLine",
    "CartState",
    "AddToCartRequest",
    "UpdateCartItemRequest",
    "CartLineView",
    "CartView",
    "CartResponse",
    "CatalogEvent",
    "CatalogEventKind",
    "CatalogStats",
]
