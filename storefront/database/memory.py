"""In-memory products table with a sample catalog"""

import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

# Sample catalog, oldest first
SAMPLE_PRODUCTS: list[dict[str, Any]] = [
    {
        "name": "iPhone 15 Pro Max 256GB",
        "price": 29990000,
        "original_price": 34990000,
        "image_url": "/images/iphone-15-pro-max.jpg",
        "description": "Khung titan, chip A17 Pro, camera 48MP.",
        "category": "Điện thoại",
        "rating": 4.8,
        "reviews": 1250,
        "stock": 15,
    },
    {
        "name": "Samsung Galaxy S24 Ultra",
        "price": 27490000,
        "original_price": 33990000,
        "image_url": "/images/galaxy-s24-ultra.jpg",
        "description": "Galaxy AI, bút S Pen tích hợp, màn hình 6.8 inch.",
        "category": "Điện thoại",
        "rating": 4.7,
        "reviews": 860,
        "stock": 8,
    },
    {
        "name": "MacBook Air M3 13 inch",
        "price": 27990000,
        "original_price": None,
        "image_url": "/images/macbook-air-m3.jpg",
        "description": "Chip M3, RAM 8GB, SSD 256GB, pin 18 giờ.",
        "category": "Laptop",
        "rating": 4.9,
        "reviews": 430,
        "stock": 0,
    },
    {
        "name": "Dell XPS 13 Plus",
        "price": 45990000,
        "original_price": 49990000,
        "image_url": "/images/dell-xps-13-plus.jpg",
        "description": "Intel Core Ultra 7, màn hình OLED 3.5K.",
        "category": "Laptop",
        "rating": None,
        "reviews": None,
        "stock": None,
    },
    {
        "name": "iPad Air M2 11 inch",
        "price": 16990000,
        "original_price": 18990000,
        "image_url": "/images/ipad-air-m2.jpg",
        "description": "Chip M2, hỗ trợ Apple Pencil Pro.",
        "category": "Tablet",
        "rating": 4.6,
        "reviews": 210,
        "stock": 20,
    },
    {
        "name": "Apple Watch Series 9 GPS 45mm",
        "price": 10490000,
        "original_price": 11990000,
        "image_url": "/images/apple-watch-s9.jpg",
        "description": "Chip S9, màn hình sáng 2000 nits.",
        "category": "Đồng hồ",
        "rating": 4.5,
        "reviews": 320,
        "stock": 12,
    },
    {
        "name": "Tai nghe AirPods Pro 2 USB-C",
        "price": 5990000,
        "original_price": 6790000,
        "image_url": "/images/airpods-pro-2.jpg",
        "description": "Chống ồn chủ động, hộp sạc USB-C.",
        "category": "Phụ kiện",
        "rating": 4.7,
        "reviews": 980,
        "stock": 50,
    },
]


class InMemoryProductsTable:
    """
    Products table kept in process memory.

    Stands in for the remote store during local development. Rows get an
    auto-incremented id and created_at/updated_at timestamps like the
    hosted table.
    """

    def __init__(self, rows: Optional[Iterable[dict[str, Any]]] = None):
        self.rows: dict[int, dict[str, Any]] = {}
        self._next_id = 1
        self._clock = datetime.now(timezone.utc)
        for row in rows or ():
            self._store(dict(row))

    @classmethod
    def with_sample_catalog(cls) -> "InMemoryProductsTable":
        """Create a table seeded with the sample catalog"""
        return cls(SAMPLE_PRODUCTS)

    def _tick(self) -> datetime:
        # Strictly increasing timestamps keep created_at ordering stable
        self._clock += timedelta(milliseconds=1)
        return self._clock

    def _store(self, row: dict[str, Any]) -> dict[str, Any]:
        row.pop("id", None)
        now = self._tick()
        stored = {"id": self._next_id, **row, "created_at": now, "updated_at": now}
        self.rows[self._next_id] = stored
        self._next_id += 1
        return stored

    async def select_all(self) -> list[dict[str, Any]]:
        rows = sorted(self.rows.values(), key=lambda r: r["created_at"], reverse=True)
        return copy.deepcopy(rows)

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        return copy.deepcopy(self._store(dict(row)))

    async def update(self, product_id: int, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        row = self.rows.get(product_id)
        if row is None:
            return None
        row.update({k: v for k, v in fields.items() if k != "id"})
        row["updated_at"] = self._tick()
        return copy.deepcopy(row)

    async def delete(self, product_id: int) -> bool:
        return self.rows.pop(product_id, None) is not None

    async def close(self) -> None:
        pass
