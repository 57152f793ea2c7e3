"""Catalog snapshot events and admin statistics"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class CatalogEventKind(str, Enum):
    LOADED = "loaded"
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


@dataclass(frozen=True)
class CatalogEvent:
    """Notification sent to catalog subscribers after a snapshot change"""
    kind: CatalogEventKind
    product_id: Optional[int] = None


class CatalogStats(BaseModel):
    """Admin dashboard figures"""
    total_products: int
    inventory_value: float
    average_rating: Optional[float] = None
    out_of_stock: int
