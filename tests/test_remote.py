import json

import httpx
import pytest

from storefront.core.exceptions import RemoteFetchError, RemoteWriteError
from storefront.database.remote import SupabaseProductsTable

ROW = {
    "id": 1,
    "name": "Phone A",
    "price": 1000,
    "category": "Điện thoại",
    "stock": 5,
    "created_at": "2024-05-01T10:00:00+00:00",
    "updated_at": "2024-05-01T10:00:00+00:00",
}


def make_table(handler) -> SupabaseProductsTable:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SupabaseProductsTable(
        supabase_url="https://project.supabase.co/",
        api_key="anon-key",
        http_client=client,
    )


class TestSupabaseProductsTable:
    """PostgREST requests and error handling"""

    async def test_select_all_orders_by_creation_desc(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[ROW])

        table = make_table(handler)
        rows = await table.select_all()
        await table.close()

        assert rows == [ROW]
        request = requests[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/products"
        assert request.url.params["order"] == "created_at.desc"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"

    async def test_insert_asks_for_stored_row(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json=[ROW])

        table = make_table(handler)
        row = await table.insert({"name": "Phone A", "price": 1000.0, "category": "Điện thoại"})

        assert row == ROW
        assert requests[0].method == "POST"
        assert requests[0].headers["Prefer"] == "return=representation"
        assert json.loads(requests[0].content) == [
            {"name": "Phone A", "price": 1000.0, "category": "Điện thoại"}
        ]

    async def test_update_filters_by_id(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[{**ROW, "price": 1200}])

        table = make_table(handler)
        row = await table.update(1, {"price": 1200.0})

        assert row["price"] == 1200
        assert requests[0].method == "PATCH"
        assert requests[0].url.params["id"] == "eq.1"
        assert json.loads(requests[0].content) == {"price": 1200.0}

    async def test_update_without_match_returns_none(self):
        table = make_table(lambda request: httpx.Response(200, json=[]))

        assert await table.update(9, {"price": 1.0}) is None

    async def test_delete_reports_whether_row_matched(self):
        responses = iter([[{"id": 1}], []])
        table = make_table(lambda request: httpx.Response(200, json=next(responses)))

        assert await table.delete(1) is True
        assert await table.delete(1) is False

    async def test_http_error_on_read_raises_fetch_error(self):
        payload = {"message": "permission denied for table products", "code": "42501", "details": None, "hint": None}
        table = make_table(lambda request: httpx.Response(401, json=payload))

        with pytest.raises(RemoteFetchError) as exc:
            await table.select_all()

        assert exc.value.status_code == 401
        assert exc.value.payload["code"] == "42501"

    async def test_http_error_on_write_raises_write_error(self):
        table = make_table(lambda request: httpx.Response(500, text="upstream failure"))

        with pytest.raises(RemoteWriteError) as exc:
            await table.insert({"name": "Phone A"})

        assert exc.value.status_code == 500
        assert exc.value.payload == {"message": "upstream failure"}

    async def test_transport_error_raises_remote_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        table = make_table(handler)

        with pytest.raises(RemoteFetchError):
            await table.select_all()
        with pytest.raises(RemoteWriteError):
            await table.delete(1)
