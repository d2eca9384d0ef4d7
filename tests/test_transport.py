"""Tests for app/services/transport.py using httpx.MockTransport."""

import asyncio
from datetime import timedelta

import httpx
import pytest

from app.services.transport import HttpTransport


@pytest.fixture
def requests_seen(monkeypatch):
    """Route every AsyncClient through a MockTransport and record the requests."""
    seen = []
    real_client = httpx.AsyncClient

    def handler(request):
        seen.append(request)
        if request.url.path == "/missing":
            return httpx.Response(404, text="nope")
        if request.url.path == "/page":
            return httpx.Response(200, text="<html>hi</html>")
        return httpx.Response(200, json=[{"id": len(seen)}])

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", factory)
    return seen


class TestHttpTransport:
    def test_json_is_cached_per_key(self, requests_seen):
        transport = HttpTransport()

        async def go():
            first = await transport.get_json("https://api.example/a", cache_key="k", ttl=timedelta(minutes=1))
            second = await transport.get_json("https://api.example/a", cache_key="k", ttl=timedelta(minutes=1))
            other = await transport.get_json("https://api.example/a", cache_key="k2", ttl=timedelta(minutes=1))
            return first, second, other

        first, second, other = asyncio.run(go())

        assert first == second == [{"id": 1}]
        assert other == [{"id": 2}]
        assert len(requests_seen) == 2

    def test_expired_entries_are_refetched(self, requests_seen):
        transport = HttpTransport()

        async def go():
            await transport.get_json("https://api.example/a", cache_key="k", ttl=timedelta(0))
            return await transport.get_json("https://api.example/a", cache_key="k", ttl=timedelta(0))

        assert asyncio.run(go()) == [{"id": 2}]
        assert len(requests_seen) == 2

    def test_headers_are_sent(self, requests_seen):
        transport = HttpTransport()
        asyncio.run(transport.get_json(
            "https://api.example/a", cache_key="k", ttl=timedelta(minutes=1),
            headers={"Authorization": "Bearer x"},
        ))
        assert requests_seen[0].headers["Authorization"] == "Bearer x"

    def test_text(self, requests_seen):
        transport = HttpTransport()
        text = asyncio.run(transport.get_text("https://site.example/page", cache_key="p", ttl=timedelta(days=1)))
        assert text == "<html>hi</html>"

    def test_http_errors_propagate_and_are_not_cached(self, requests_seen):
        transport = HttpTransport()

        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(transport.get_json("https://api.example/missing", cache_key="m", ttl=timedelta(days=1)))
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(transport.get_json("https://api.example/missing", cache_key="m", ttl=timedelta(days=1)))
        assert len(requests_seen) == 2
