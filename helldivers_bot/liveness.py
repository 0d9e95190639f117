"""Keep-alive HTTP endpoint polled by external uptime monitors."""

from __future__ import annotations

import contextlib
import logging
from typing import Optional

from aiohttp import web

from .constants import LIVENESS_BODY

LOGGER = logging.getLogger(__name__)


def build_liveness_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", _handle_root)
    return app


async def _handle_root(request: web.Request) -> web.Response:
    return web.Response(text=LIVENESS_BODY)


class LivenessServer:
    """Minimal HTTP server answering `GET /` with a static body."""

    def __init__(self, host: str, port: int) -> None:
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    @property
    def running(self) -> bool:
        return self._site is not None

    async def start(self) -> None:
        self._runner = web.AppRunner(build_liveness_app(), access_log=None)
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        LOGGER.info("Keep-alive server listening on http://%s:%s/", self._host, self._port)

    async def stop(self) -> None:
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        if self._runner is not None:
            await self._runner.cleanup()
        self._site = None
        self._runner = None
