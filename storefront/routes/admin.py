"""Admin product management routes"""

from typing import Any, Optional
from fastapi import APIRouter, Body, HTTPException, Query, Depends

from ..core.exceptions import (
    NotFoundError,
    RemoteStoreError,
    StorefrontError,
    ValidationError,
)
from ..database.catalog import CatalogStore, filter_by_name_or_category
from ..dependencies import get_catalog
from ..models.catalog import CatalogStats
from ..models.product import AdminProductListResponse, ProductResponse

router = APIRouter(prefix="/api/admin", tags=["Admin"])


def _http_error(error: StorefrontError) -> HTTPException:
    """Map a catalog failure to an HTTP error"""
    if isinstance(error, ValidationError):
        return HTTPException(status_code=422, detail=error.errors)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, RemoteStoreError):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))


@router.get("/products", response_model=AdminProductListResponse)
async def list_products(
    q: Optional[str] = Query(None, description="Search by name or category"),
    catalog: CatalogStore = Depends(get_catalog),
):
    """List products, newest first, optionally filtered by name or category"""
    products = filter_by_name_or_category(catalog.snapshot, q)
    return AdminProductListResponse(
        products=list(products),
        total=len(products),
        query=q,
    )


@router.get("/stats", response_model=CatalogStats)
async def get_stats(catalog: CatalogStore = Depends(get_catalog)):
    """Dashboard figures for the whole catalog"""
    return catalog.stats()


@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(
    data: dict[str, Any] = Body(...),
    catalog: CatalogStore = Depends(get_catalog),
):
    """Create a product from admin form fields"""
    try:
        product = await catalog.create(data)
    except StorefrontError as e:
        raise _http_error(e)
    return ProductResponse(product=product, message="Product created")


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    data: dict[str, Any] = Body(...),
    catalog: CatalogStore = Depends(get_catalog),
):
    """Update the provided fields of a product"""
    try:
        product = await catalog.update(product_id, data)
    except StorefrontError as e:
        raise _http_error(e)
    return ProductResponse(product=product, message="Product updated")


@router.delete("/products/{product_id}", response_model=ProductResponse)
async def delete_product(
    product_id: int,
    catalog: CatalogStore = Depends(get_catalog),
):
    """Delete a product"""
    try:
        await catalog.delete(product_id)
    except StorefrontError as e:
        raise _http_error(e)
    return ProductResponse(message="Product deleted")


@router.post("/products/reload", response_model=AdminProductListResponse)
async def reload_products(catalog: CatalogStore = Depends(get_catalog)):
    """Fetch the catalog again from the remote store"""
    try:
        products = await catalog.load()
    except RemoteStoreError as e:
        raise _http_error(e)
    return AdminProductListResponse(products=list(products), total=len(products))
