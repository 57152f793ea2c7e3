"""Catalog store: local snapshot of the products table"""

import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import NotFoundError, RemoteWriteError
from ..models.catalog import CatalogEvent, CatalogEventKind, CatalogStats
from ..models.product import Product, parse_product_fields
from .remote import ProductsTable

logger = logging.getLogger(__name__)

Snapshot = tuple[Product, ...]
Listener = Callable[[CatalogEvent, Snapshot], None]


def filter_by_name(snapshot: Sequence[Product], query: Optional[str]) -> Sequence[Product]:
    """Case-insensitive substring match on the product name"""
    if not query:
        return snapshot
    needle = query.lower()
    return tuple(p for p in snapshot if needle in p.name.lower())


def filter_by_name_or_category(snapshot: Sequence[Product], query: Optional[str]) -> Sequence[Product]:
    """Case-insensitive substring match on the product name or category"""
    if not query:
        return snapshot
    needle = query.lower()
    return tuple(
        p for p in snapshot
        if needle in p.name.lower() or needle in p.category.value.lower()
    )


def catalog_stats(snapshot: Sequence[Product]) -> CatalogStats:
    """Compute the admin dashboard figures for a snapshot"""
    ratings = [p.rating for p in snapshot if p.rating is not None]
    return CatalogStats(
        total_products=len(snapshot),
        inventory_value=sum(p.price * (p.stock or 0) for p in snapshot),
        average_rating=round(sum(ratings) / len(ratings), 1) if ratings else None,
        out_of_stock=sum(1 for p in snapshot if not p.in_stock),
    )


class CatalogStore:
    """
    Products as last fetched from the remote table.

    The snapshot is an immutable tuple that is replaced, never edited, and
    only after the remote store has confirmed a write. Subscribers are
    notified with the new snapshot after every change.
    """

    def __init__(self, table: ProductsTable):
        self.table = table
        self._snapshot: Snapshot = ()
        self._listeners: list[Listener] = []

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for snapshot changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, snapshot: Snapshot, event: CatalogEvent) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            try:
                listener(event, snapshot)
            except Exception:
                logger.exception(f"Catalog listener failed on {event.kind.value} event")

    def _find(self, product_id: int) -> Optional[Product]:
        return next((p for p in self._snapshot if p.id == product_id), None)

    def get(self, product_id: int) -> Product:
        """Get a product from the current snapshot"""
        product = self._find(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    async def load(self) -> Snapshot:
        """
        Fetch all products, most recently created first.

        Rows that do not parse as products are skipped with a warning. On
        failure the previous snapshot is kept.

        Raises:
            RemoteFetchError: If the remote call failed
        """
        rows = await self.table.select_all()

        products = []
        for row in rows:
            try:
                products.append(Product.model_validate(row))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed product row {row.get('id')}: {e.error_count()} errors")

        self._replace(tuple(products), CatalogEvent(CatalogEventKind.LOADED))
        logger.info(f"Loaded {len(products)} products")
        return self._snapshot

    async def create(self, data: Mapping[str, Any]) -> Product:
        """
        Insert a product and prepend it to the snapshot.

        A load that finished during the insert may already hold the new
        row; that entry is replaced so ids stay unique.

        Raises:
            ValidationError: If the input is invalid (nothing is written)
            RemoteWriteError: If the remote insert failed
        """
        fields = parse_product_fields(data)
        row = await self.table.insert(fields)
        product = _stored_product(row)

        self._replace(
            (product, *(p for p in self._snapshot if p.id != product.id)),
            CatalogEvent(CatalogEventKind.CREATED, product.id),
        )
        logger.info(f"Created product {product.id} ({product.name})")
        return product

    async def update(self, product_id: int, data: Mapping[str, Any]) -> Product:
        """
        Update the provided fields of a product.

        The snapshot entry is replaced in place by the existing record with
        the provided fields merged over it. Concurrent updates of the same
        id are not serialized; the last one to complete wins.

        Raises:
            ValidationError: If the input is invalid (nothing is written)
            NotFoundError: If the id is not in the catalog
            RemoteWriteError: If the remote update failed
        """
        fields = parse_product_fields(data, partial=True)
        self.get(product_id)

        row = await self.table.update(product_id, fields)
        if row is None:
            raise NotFoundError(product_id)

        # Re-read after the round-trip, the entry may have changed meanwhile
        current = self.get(product_id)
        merged = {**current.model_dump(), **fields}
        if row.get("updated_at") is not None:
            merged["updated_at"] = row["updated_at"]
        product = _stored_product(merged)

        self._replace(
            tuple(product if p.id == product_id else p for p in self._snapshot),
            CatalogEvent(CatalogEventKind.UPDATED, product_id),
        )
        logger.info(f"Updated product {product_id}: {sorted(fields)}")
        return product

    async def delete(self, product_id: int) -> None:
        """
        Delete a product and drop it from the snapshot.

        Raises:
            NotFoundError: If the id is not in the catalog, or the remote
                table no longer has it (the stale entry is dropped)
            RemoteWriteError: If the remote delete failed
        """
        self.get(product_id)
        deleted = await self.table.delete(product_id)

        self._replace(
            tuple(p for p in self._snapshot if p.id != product_id),
            CatalogEvent(CatalogEventKind.DELETED, product_id),
        )
        if not deleted:
            logger.warning(f"Product {product_id} was already gone from the remote table")
            raise NotFoundError(product_id)
        logger.info(f"Deleted product {product_id}")

    def stats(self) -> CatalogStats:
        return catalog_stats(self._snapshot)


def _stored_product(row: Mapping[str, Any]) -> Product:
    """Parse a row confirmed by the remote store"""
    try:
        return Product.model_validate(row)
    except PydanticValidationError as e:
        raise RemoteWriteError(f"Remote store returned a malformed product row: {e.error_count()} errors") from e
