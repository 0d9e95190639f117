"""HTTP client for the Helldivers Training Manual war API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from .config import ApiConfig

LOGGER = logging.getLogger(__name__)

WAR_STATUS_PATH = "/war/status"
MAJOR_ORDERS_PATH = "/war/major-orders"
NEWS_PATH = "/war/news"
CAMPAIGN_PATH = "/war/campaign"


async def fetch_json(
    session: aiohttp.ClientSession, url: str, *, timeout: float
) -> Optional[Any]:
    """GET ``url`` and decode the body as JSON.

    Returns ``None`` when the request fails for any reason: transport error,
    timeout, non-2xx status or a body that is not valid JSON. ``None`` means
    "data unavailable" and is never an empty-but-valid payload.
    """

    try:
        async with asyncio.timeout(timeout):
            async with session.get(url) as response:
                if not 200 <= response.status < 300:
                    LOGGER.warning(
                        "API fetch failed (%d): %s", response.status, url
                    )
                    return None
                return await response.json(content_type=None)
    except asyncio.TimeoutError:
        LOGGER.warning("API fetch timed out after %.1fs: %s", timeout, url)
    except aiohttp.ClientError as exc:
        LOGGER.warning("API fetch error for %s: %s", url, exc)
    except ValueError as exc:
        LOGGER.warning("API returned malformed JSON for %s: %s", url, exc)
    return None


class WarApiClient:
    """Read-only access to the galactic war endpoints."""

    def __init__(
        self,
        config: ApiConfig,
        *,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        self.config = config
        self._base_url = config.base_url.rstrip("/")
        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    async def start(self) -> None:
        if self._session is None:
            self._session = aiohttp.ClientSession()

    async def stop(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "WarApiClient":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def url_for(self, path: str) -> str:
        return f"{self._base_url}{path}"

    async def fetch(self, path: str) -> Optional[Any]:
        await self.start()
        assert self._session is not None  # narrow type for linters
        return await fetch_json(
            self._session, self.url_for(path), timeout=self.config.timeout_seconds
        )

    async def fetch_war_status(self) -> Optional[Any]:
        return await self.fetch(WAR_STATUS_PATH)

    async def fetch_major_orders(self) -> Optional[Any]:
        return await self.fetch(MAJOR_ORDERS_PATH)

    async def fetch_news(self) -> Optional[Any]:
        return await self.fetch(NEWS_PATH)

    async def fetch_campaigns(self) -> Optional[Any]:
        return await self.fetch(CAMPAIGN_PATH)
