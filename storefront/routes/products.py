"""Catalog browsing routes"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends

from ..core.exceptions import NotFoundError
from ..core.formatting import format_price
from ..database.catalog import CatalogStore, filter_by_name
from ..dependencies import get_catalog
from ..models.product import (
    Product,
    ProductCategory,
    ProductListing,
    ProductSearchResponse,
)
from ..services.ledger import can_add_to_cart

router = APIRouter(prefix="/api/products", tags=["Products"])


def to_listing(product: Product) -> ProductListing:
    """Attach display prices and the add-to-cart state"""
    return ProductListing(
        product=product,
        can_add_to_cart=can_add_to_cart(product),
        price_display=format_price(product.price),
        original_price_display=(
            format_price(product.original_price)
            if product.original_price is not None else None
        ),
    )


@router.get("", response_model=ProductSearchResponse)
async def search_products(
    q: Optional[str] = Query(None, description="Search by product name"),
    catalog: CatalogStore = Depends(get_catalog),
):
    """Browse the catalog, newest first, optionally filtered by name"""
    products = filter_by_name(catalog.snapshot, q)
    return ProductSearchResponse(
        products=[to_listing(p) for p in products],
        total=len(products),
        query=q,
    )


@router.get("/categories", response_model=list[str])
async def list_categories():
    """List all product categories"""
    return [c.value for c in ProductCategory]


@router.get("/{product_id}", response_model=ProductListing)
async def get_product(
    product_id: int,
    catalog: CatalogStore = Depends(get_catalog),
):
    """Get a product by ID"""
    try:
        product = catalog.get(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return to_listing(product)
