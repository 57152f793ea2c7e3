import asyncio

import pytest

from storefront.core.exceptions import RemoteFetchError, RemoteWriteError
from storefront.database.catalog import CatalogStore
from storefront.database.memory import InMemoryProductsTable
from storefront.models.product import Product, ProductCategory


PHONE_ROWS = [
    {"name": "Phone A", "price": 1000, "category": "Điện thoại", "stock": 5},
    {"name": "Phone B", "price": 2000, "category": "Điện thoại", "stock": 0},
]


class FailingProductsTable(InMemoryProductsTable):
    """Table whose remote calls fail once `failing` is set"""

    failing = False

    async def select_all(self):
        if self.failing:
            raise RemoteFetchError("GET products failed: 503", status_code=503)
        return await super().select_all()

    async def insert(self, row):
        if self.failing:
            raise RemoteWriteError("POST products failed: 503", status_code=503)
        return await super().insert(row)

    async def update(self, product_id, fields):
        if self.failing:
            raise RemoteWriteError("PATCH products failed: 503", status_code=503)
        return await super().update(product_id, fields)

    async def delete(self, product_id):
        if self.failing:
            raise RemoteWriteError("DELETE products failed: 503", status_code=503)
        return await super().delete(product_id)


class GatedProductsTable(InMemoryProductsTable):
    """
    Table that commits writes immediately but can hold their responses.

    Each gate from `hold_next_write` holds back the response of the next
    write until the gate is set, so tests can interleave operations.
    """

    def __init__(self, rows=None):
        super().__init__(rows)
        self.gates: list[asyncio.Event] = []

    def hold_next_write(self) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates.append(gate)
        return gate

    async def _respond(self, result):
        if self.gates:
            await self.gates.pop(0).wait()
        return result

    async def insert(self, row):
        return await self._respond(await super().insert(row))

    async def update(self, product_id, fields):
        return await self._respond(await super().update(product_id, fields))

    async def delete(self, product_id):
        return await self._respond(await super().delete(product_id))


def make_product(product_id: int, name: str, price: float, stock=None, **kwargs) -> Product:
    return Product(
        id=product_id,
        name=name,
        price=price,
        stock=stock,
        category=kwargs.pop("category", ProductCategory.PHONE),
        **kwargs,
    )


@pytest.fixture
def phone_a() -> Product:
    return make_product(1, "Phone A", 1000, stock=5)


@pytest.fixture
def phone_b() -> Product:
    return make_product(2, "Phone B", 2000, stock=0)


@pytest.fixture
def table() -> FailingProductsTable:
    return FailingProductsTable(PHONE_ROWS)


@pytest.fixture
async def catalog(table) -> CatalogStore:
    store = CatalogStore(table)
    await store.load()
    return store


@pytest.fixture
def gated_table() -> GatedProductsTable:
    return GatedProductsTable(PHONE_ROWS)


@pytest.fixture
async def gated_catalog(gated_table) -> CatalogStore:
    store = CatalogStore(gated_table)
    await store.load()
    return store
