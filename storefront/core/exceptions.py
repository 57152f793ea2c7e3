"""
Storefront errors

Domain errors raised by the catalog store, the cart ledger and the
remote products table. The HTTP layer maps them to status codes.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    """Base exception for all storefront failures"""
    pass


class ValidationError(StorefrontError):
    """Missing or malformed field, raised before any remote write"""

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"Invalid product data: {fields}")


class NotFoundError(StorefrontError):
    """Operation targets a product id that is not in the catalog"""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class InvalidQuantityError(StorefrontError):
    """Cart quantity must be a non-negative integer"""

    def __init__(self, quantity: Any):
        self.quantity = quantity
        super().__init__(f"Invalid quantity: {quantity!r}")


class RemoteStoreError(StorefrontError):
    """The remote data store call failed or returned an error"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[dict] = None,
    ):
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)


class RemoteFetchError(RemoteStoreError):
    """Reading from the remote store failed"""
    pass


class RemoteWriteError(RemoteStoreError):
    """Writing to the remote store failed"""
    pass
