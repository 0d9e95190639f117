"""Main application entry-point for helldivers-bot."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Optional

import aiohttp
import discord

from .api import WarApiClient
from .bot import WarBotClient
from .commands import CommandDispatcher
from .config import BotConfig, ConfigurationError, load_config
from .liveness import LivenessServer
from .logging import configure_logging

LOGGER = logging.getLogger(__name__)


class HelldiversBotApp:
    """Coordinates startup and shutdown of the bot and its keep-alive server.

    The Discord client can be injected for testing; by default one is built
    around a :class:`CommandDispatcher` backed by the war API client.
    """

    def __init__(
        self,
        config: Optional[BotConfig] = None,
        *,
        client: Optional[WarBotClient] = None,
    ) -> None:
        self._config = config or load_config()
        self._client = client
        self._liveness: Optional[LivenessServer] = None
        self._terminating = False

    @property
    def config(self) -> BotConfig:
        return self._config

    async def run(self) -> None:
        token = self._config.require_token()
        LOGGER.info("helldivers-bot starting with config: %s", self._config.path)

        loop = asyncio.get_running_loop()
        self._install_sigterm_handler(loop)
        try:
            await self._start_liveness()
            timeout = aiohttp.ClientTimeout(total=self._config.api.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                client = self._client or self._build_client(session)
                async with client:
                    await client.start(token)
        except asyncio.CancelledError:
            LOGGER.info("helldivers-bot received shutdown signal")
            if not self._terminating:
                raise
        finally:
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.remove_signal_handler(signal.SIGTERM)
            await self._stop_liveness()

    def _install_sigterm_handler(self, loop: asyncio.AbstractEventLoop) -> None:
        main_task = asyncio.current_task()
        if main_task is None:
            return

        def _on_sigterm() -> None:
            self._terminating = True
            main_task.cancel()

        # Not available on Windows event loops.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(signal.SIGTERM, _on_sigterm)

    def _build_client(self, session: aiohttp.ClientSession) -> WarBotClient:
        api = WarApiClient(self._config.api, session=session)
        dispatcher = CommandDispatcher(api)
        return WarBotClient(
            dispatcher, application_id=self._config.discord.application_id
        )

    async def _start_liveness(self) -> None:
        liveness = self._config.liveness
        if not liveness.enabled:
            LOGGER.info("Keep-alive server disabled")
            return

        server = LivenessServer(liveness.host, liveness.port)
        try:
            await server.start()
        except (OSError, OverflowError) as exc:
            LOGGER.error(
                "Unable to start keep-alive server on %s:%s: %s",
                liveness.host,
                liveness.port,
                exc,
            )
            await server.stop()
            return
        self._liveness = server

    async def _stop_liveness(self) -> None:
        if self._liveness is not None:
            await self._liveness.stop()
            self._liveness = None

    @classmethod
    def start(
        cls,
        config: Optional[BotConfig] = None,
        *,
        client: Optional[WarBotClient] = None,
    ) -> int:
        instance = cls(config=config, client=client)
        configure_logging(
            instance._config.logging.level,
            log_path=instance._config.logging.path,
            log_network=instance._config.logging.log_network,
        )
        try:
            asyncio.run(instance.run())
        except KeyboardInterrupt:
            LOGGER.info("helldivers-bot received shutdown signal")
        except ConfigurationError as exc:
            LOGGER.error("Cannot start: %s", exc)
            return 1
        except discord.LoginFailure as exc:
            LOGGER.error("Discord authentication failed: %s", exc)
            return 1
        return 0
