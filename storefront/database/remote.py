"""
Products table client

Generic query interface over the `products` relation and its Supabase
(PostgREST) implementation.
"""

import logging
from typing import Any, Optional, Protocol

import httpx

from ..core.exceptions import RemoteFetchError, RemoteWriteError, RemoteStoreError

logger = logging.getLogger(__name__)


class ProductsTable(Protocol):
    """Remote data store holding product rows"""

    async def select_all(self) -> list[dict[str, Any]]:
        """All rows, most recently created first"""
        ...

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        """Insert a row and return it as stored"""
        ...

    async def update(self, product_id: int, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Update a row, returning it as stored or None if no row matched"""
        ...

    async def delete(self, product_id: int) -> bool:
        """Delete a row, returning False if no row matched"""
        ...

    async def close(self) -> None:
        ...


class SupabaseProductsTable:
    """
    Products table reached through the Supabase REST API.

    Every request carries the project's anon key. Writes ask PostgREST to
    return the affected rows so the caller sees the stored values.
    """

    def __init__(
        self,
        supabase_url: str,
        api_key: str,
        table: str = "products",
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the table client.

        Args:
            supabase_url: Project URL, e.g. https://xyz.supabase.co
            api_key: Anon or service key
            table: Name of the products relation
            timeout: Request timeout in seconds
            http_client: Preconfigured client (used by tests)
        """
        self.base_url = f"{supabase_url.rstrip('/')}/rest/v1/{table}"
        self.table = table
        self._api_key = api_key
        self._http_client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def _headers(self, returning: bool = False) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if returning:
            headers["Prefer"] = "return=representation"
        return headers

    async def _request(
        self,
        method: str,
        params: dict[str, str],
        error_cls: type[RemoteStoreError],
        body: Optional[Any] = None,
        returning: bool = False,
    ) -> Any:
        """Make a request against the table and decode the JSON result"""
        try:
            response = await self._http_client.request(
                method=method,
                url=self.base_url,
                params=params,
                headers=self._headers(returning=returning),
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {self.table} failed: {e}")
            raise error_cls(f"{method} {self.table} failed: {e}") from e

        if response.status_code >= 400:
            payload = _error_payload(response)
            logger.error(
                f"{method} {self.table} failed: {response.status_code} - "
                f"{payload.get('message', response.text)}"
            )
            raise error_cls(
                f"{method} {self.table} failed: {response.status_code}",
                status_code=response.status_code,
                payload=payload,
            )

        if not response.content:
            return []
        return response.json()

    async def select_all(self) -> list[dict[str, Any]]:
        return await self._request(
            "GET",
            {"select": "*", "order": "created_at.desc"},
            RemoteFetchError,
        )

    async def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        rows = await self._request(
            "POST",
            {"select": "*"},
            RemoteWriteError,
            body=[row],
            returning=True,
        )
        if not rows:
            raise RemoteWriteError(f"POST {self.table} returned no row")
        return rows[0]

    async def update(self, product_id: int, fields: dict[str, Any]) -> Optional[dict[str, Any]]:
        rows = await self._request(
            "PATCH",
            {"id": f"eq.{product_id}", "select": "*"},
            RemoteWriteError,
            body=fields,
            returning=True,
        )
        return rows[0] if rows else None

    async def delete(self, product_id: int) -> bool:
        rows = await self._request(
            "DELETE",
            {"id": f"eq.{product_id}", "select": "id"},
            RemoteWriteError,
            returning=True,
        )
        return bool(rows)


def _error_payload(response: httpx.Response) -> dict[str, Any]:
    """PostgREST error body: message, code, details, hint"""
    try:
        payload = response.json()
    except ValueError:
        return {"message": response.text}
    if isinstance(payload, dict):
        return payload
    return {"message": str(payload)}
