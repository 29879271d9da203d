# tests/test_async_client.py
import asyncio

import httpx
import pytest

from mock_api.main import app
from storefront.async_client import AsyncCatalogClient
from storefront.errors import ClientClosedError, DecodeError, RemoteError, TransportError

BASE = "http://test/api"


def _client():
    return AsyncCatalogClient(base_url=BASE, transport=httpx.ASGITransport(app=app))


async def _fetch_all():
    async with _client() as c:
        return await asyncio.gather(
            c.check_health(),
            c.list_products(),
            c.list_stories(),
            c.list_sellers(),
            c.search_products("iPhone 15"),
        )


def test_all_operations(api):
    health, products, stories, sellers, found = asyncio.run(_fetch_all())
    assert health == "API is healthy"
    assert len(products) == 3
    assert len(stories) == 2
    assert len(sellers) == 2
    assert [p.id for p in found] == ["p-1"]


def _call(operation):
    async def run():
        async with _client() as c:
            return await getattr(c, operation)()
    return asyncio.run(run())


def test_error_mapping(api):
    api.post("/debug/fault", json={"endpoint": "products", "status_code": 500})
    with pytest.raises(TransportError) as exc:
        _call("list_products")
    assert exc.value.status_code == 500

    api.post("/debug/fault", json={"endpoint": "stories", "body": "nope"})
    with pytest.raises(DecodeError):
        _call("list_stories")

    api.post("/debug/fault", json={"endpoint": "sellers", "envelope": {"success": False}})
    with pytest.raises(RemoteError) as exc:
        _call("list_sellers")
    assert exc.value.reason == "API request failed"


def test_tolerant_decode(api):
    api.post("/debug/seed", json={"collection": "sellers", "records": [
        {"id": "s-1", "name": "One"},
        {"id": "s-2"},
        {"id": "s-3", "name": "Three"},
    ]})

    sellers = _call("list_sellers")
    assert [s.id for s in sellers] == ["s-1", "s-3"]
    assert sellers.diagnostics[0].index == 1


def test_connection_error_is_transport_error():
    async def run():
        async with AsyncCatalogClient(base_url="http://127.0.0.1:9/api", timeout=1) as c:
            await c.check_health()

    with pytest.raises(TransportError):
        asyncio.run(run())


def test_closed_client_rejects_calls():
    async def run():
        c = _client()
        await c.aclose()
        await c.list_products()

    with pytest.raises(ClientClosedError):
        asyncio.run(run())


def test_requests_carry_json_headers_and_timeouts(api):
    c = _client()
    assert c._client.timeout == httpx.Timeout(10, connect=10)
    asyncio.run(c.aclose())

    _call("list_stories")
    log = api.get("/debug/requests").json()
    assert [r["path"] for r in log] == ["/api/stories"]
    assert log[0]["headers"]["accept"] == "application/json"
    assert log[0]["headers"]["content-type"] == "application/json"
