# storefront/async_client.py
import logging
from typing import Any, Optional

import httpx

from storefront.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, JSON_HEADERS
from storefront.decoding import (
    Batch,
    DEFAULT_HEALTH_ERROR,
    build_search_url,
    unwrap_list,
    unwrap_message,
)
from storefront.errors import ClientClosedError, DecodeError, TransportError
from storefront.models import Product, Seller, Story

logger = logging.getLogger(__name__)


class AsyncCatalogClient:
    """Coroutine flavour of `CatalogClient`, same endpoints and error mapping."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            headers=JSON_HEADERS,
            timeout=httpx.Timeout(timeout, connect=timeout),
            transport=transport,
        )
        self._closed = False

    async def list_products(self) -> Batch:
        return unwrap_list(await self._get_json(f"{self.base_url}/products"), Product, "product")

    async def search_products(self, query: str) -> Batch:
        url = build_search_url(self.base_url, query)
        return unwrap_list(await self._get_json(url), Product, "product")

    async def list_stories(self) -> Batch:
        return unwrap_list(await self._get_json(f"{self.base_url}/stories"), Story, "story")

    async def list_sellers(self) -> Batch:
        return unwrap_list(await self._get_json(f"{self.base_url}/sellers"), Seller, "seller")

    async def check_health(self) -> str:
        return unwrap_message(await self._get_json(f"{self.base_url}/health"), DEFAULT_HEALTH_ERROR)

    async def aclose(self):
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def _get_json(self, url: str) -> Any:
        if self._closed:
            raise ClientClosedError(f"Cannot request {url}: client is closed")
        try:
            r = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout while requesting {url}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug("HTTP Response Code: %d for URL: %s", r.status_code, url)
        if not r.is_success:
            raise TransportError.from_status(r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"Response from {url} is not valid JSON") from e
