"""Tests for the war API client."""

from __future__ import annotations

import asyncio

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web

from helldivers_bot.api import WarApiClient, fetch_json
from helldivers_bot.config import ApiConfig


@pytest_asyncio.fixture
async def war_api_server(unused_tcp_port_factory):
    requests: list[str] = []

    async def status_handler(request: web.Request):
        requests.append(request.path)
        return web.json_response({"planetStatus": [{"index": 0, "owner": 1}]})

    async def campaign_handler(request: web.Request):
        requests.append(request.path)
        return web.Response(text='[{"name": "Malevelon Creek"}]', content_type="text/plain")

    async def news_handler(request: web.Request):
        requests.append(request.path)
        return web.Response(status=503, text="maintenance")

    async def orders_handler(request: web.Request):
        requests.append(request.path)
        return web.Response(text="<html>not json</html>", content_type="text/html")

    async def slow_handler(request: web.Request):
        await asyncio.sleep(0.5)
        return web.json_response([])

    app = web.Application()
    app.router.add_get("/api/v1/war/status", status_handler)
    app.router.add_get("/api/v1/war/campaign", campaign_handler)
    app.router.add_get("/api/v1/war/news", news_handler)
    app.router.add_get("/api/v1/war/major-orders", orders_handler)
    app.router.add_get("/slow", slow_handler)

    runner = web.AppRunner(app)
    await runner.setup()

    port = unused_tcp_port_factory()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()

    class _Server:
        def __init__(self, server_port: int):
            self._port = server_port
            self.requests = requests

        def make_url(self, path: str = "/") -> str:
            if not path.startswith("/"):
                path = "/" + path
            return f"http://127.0.0.1:{self._port}{path}"

    try:
        yield _Server(port)
    finally:
        await runner.cleanup()


@pytest.mark.asyncio
async def test_fetch_war_status_returns_payload(war_api_server):
    config = ApiConfig(base_url=war_api_server.make_url("/api/v1/"), timeout_seconds=2.0)

    async with WarApiClient(config) as client:
        payload = await client.fetch_war_status()

    assert payload == {"planetStatus": [{"index": 0, "owner": 1}]}
    assert war_api_server.requests == ["/api/v1/war/status"]


@pytest.mark.asyncio
async def test_fetch_accepts_json_without_json_content_type(war_api_server):
    config = ApiConfig(base_url=war_api_server.make_url("/api/v1"), timeout_seconds=2.0)

    async with WarApiClient(config) as client:
        payload = await client.fetch_campaigns()

    assert payload == [{"name": "Malevelon Creek"}]


@pytest.mark.asyncio
async def test_non_success_status_is_unavailable(war_api_server, caplog):
    config = ApiConfig(base_url=war_api_server.make_url("/api/v1"), timeout_seconds=2.0)

    async with WarApiClient(config) as client:
        payload = await client.fetch_news()

    assert payload is None
    assert "API fetch failed (503)" in caplog.text


@pytest.mark.asyncio
async def test_malformed_body_is_unavailable(war_api_server):
    config = ApiConfig(base_url=war_api_server.make_url("/api/v1"), timeout_seconds=2.0)

    async with WarApiClient(config) as client:
        assert await client.fetch_major_orders() is None


@pytest.mark.asyncio
async def test_timeout_is_unavailable(war_api_server):
    async with aiohttp.ClientSession() as session:
        payload = await fetch_json(
            session, war_api_server.make_url("/slow"), timeout=0.05
        )

    assert payload is None


@pytest.mark.asyncio
async def test_connection_error_is_unavailable(unused_tcp_port):
    config = ApiConfig(base_url=f"http://127.0.0.1:{unused_tcp_port}", timeout_seconds=2.0)

    async with WarApiClient(config) as client:
        assert await client.fetch_war_status() is None


@pytest.mark.asyncio
async def test_injected_session_is_not_closed(war_api_server):
    config = ApiConfig(base_url=war_api_server.make_url("/api/v1"), timeout_seconds=2.0)

    async with aiohttp.ClientSession() as session:
        client = WarApiClient(config, session=session)
        await client.fetch_war_status()
        await client.stop()

        assert not session.closed


def test_url_for_strips_trailing_slash():
    client = WarApiClient(ApiConfig(base_url="https://example.com/api/v1/"))

    assert client.url_for("/war/news") == "https://example.com/api/v1/war/news"
