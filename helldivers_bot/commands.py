"""Slash command table and dispatcher."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Tuple

import discord

from . import formatters
from .loadouts import pick_loadout
from .models import Faction

LOGGER = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong while handling that command."


class CommandConfigurationError(RuntimeError):
    """Raised when the command table and handlers disagree."""


class CommandNames:
    """Slash command names registered with Discord."""

    WAR = "war"
    ORDERS = "orders"
    DISPATCH = "dispatch"
    CAMPAIGNS = "campaigns"
    LOADOUT_BUGS = "loadout-bugs"
    LOADOUT_BOTS = "loadout-bots"


@dataclass(frozen=True, slots=True)
class CommandSpec:
    name: str
    description: str


COMMAND_SPECS: Tuple[CommandSpec, ...] = (
    CommandSpec(CommandNames.WAR, "Show current galactic war status"),
    CommandSpec(CommandNames.ORDERS, "Show current major orders"),
    CommandSpec(CommandNames.DISPATCH, "Show latest dispatch message"),
    CommandSpec(CommandNames.CAMPAIGNS, "Show active campaigns"),
    CommandSpec(CommandNames.LOADOUT_BUGS, "Get a random loadout for fighting Terminids"),
    CommandSpec(CommandNames.LOADOUT_BOTS, "Get a random loadout for fighting Automatons"),
)


class CommandState(str, Enum):
    REPLIED = "replied"
    FAILED = "failed"


@dataclass(slots=True)
class CommandReply:
    content: Optional[str] = None
    embed: Optional[discord.Embed] = None
    state: CommandState = CommandState.REPLIED


class WarDataSource(Protocol):
    """Subset of :class:`~helldivers_bot.api.WarApiClient` used by handlers."""

    async def fetch_war_status(self) -> Optional[Any]:
        ...

    async def fetch_major_orders(self) -> Optional[Any]:
        ...

    async def fetch_news(self) -> Optional[Any]:
        ...

    async def fetch_campaigns(self) -> Optional[Any]:
        ...


Handler = Callable[[], Awaitable[CommandReply]]


def _text_reply(content: str, payload: Any) -> CommandReply:
    state = CommandState.FAILED if payload is None else CommandState.REPLIED
    return CommandReply(content=content, state=state)


class CommandDispatcher:
    """Maps slash command names to fetch, format and reply handlers."""

    def __init__(
        self,
        api: WarDataSource,
        *,
        specs: Tuple[CommandSpec, ...] = COMMAND_SPECS,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._api = api
        self._rng = rng
        self._specs = specs
        self._handlers: Dict[str, Handler] = {
            CommandNames.WAR: self._handle_war,
            CommandNames.ORDERS: self._handle_orders,
            CommandNames.DISPATCH: self._handle_dispatch,
            CommandNames.CAMPAIGNS: self._handle_campaigns,
            CommandNames.LOADOUT_BUGS: self._handle_loadout_bugs,
            CommandNames.LOADOUT_BOTS: self._handle_loadout_bots,
        }

        registered = {spec.name for spec in specs}
        missing = registered - self._handlers.keys()
        if missing:
            raise CommandConfigurationError(
                f"No handler for command(s): {', '.join(sorted(missing))}"
            )
        orphaned = self._handlers.keys() - registered
        if orphaned:
            raise CommandConfigurationError(
                f"Handler(s) without a registered command: {', '.join(sorted(orphaned))}"
            )

    @property
    def specs(self) -> Tuple[CommandSpec, ...]:
        return self._specs

    def has_command(self, name: str) -> bool:
        return name in self._handlers

    async def dispatch(self, command_name: str) -> CommandReply:
        """Run the handler for ``command_name`` and return exactly one reply."""

        handler = self._handlers.get(command_name)
        if handler is None:
            LOGGER.warning("Received unknown command: %s", command_name)
            return CommandReply(
                content=f"Unknown command: {command_name}",
                state=CommandState.FAILED,
            )

        LOGGER.debug("[CommandDispatch] Executing command: %s", command_name)
        try:
            reply = await handler()
        except Exception:
            LOGGER.exception("Command %s failed", command_name)
            return CommandReply(
                content=UNEXPECTED_ERROR_MESSAGE, state=CommandState.FAILED
            )

        LOGGER.info("Command %s -> %s", command_name, reply.state.value)
        return reply

    async def _handle_war(self) -> CommandReply:
        campaigns = await self._api.fetch_campaigns()
        if campaigns is None:
            return CommandReply(
                content=formatters.NO_WAR_STATUS, state=CommandState.FAILED
            )
        status = await self._api.fetch_war_status()
        return _text_reply(formatters.format_war_status(status, campaigns), status)

    async def _handle_orders(self) -> CommandReply:
        orders = await self._api.fetch_major_orders()
        return _text_reply(formatters.format_major_order(orders), orders)

    async def _handle_dispatch(self) -> CommandReply:
        news = await self._api.fetch_news()
        return _text_reply(formatters.format_dispatch(news), news)

    async def _handle_campaigns(self) -> CommandReply:
        campaigns = await self._api.fetch_campaigns()
        return _text_reply(formatters.format_campaigns(campaigns), campaigns)

    async def _handle_loadout_bugs(self) -> CommandReply:
        return self._loadout_reply(Faction.TERMINIDS)

    async def _handle_loadout_bots(self) -> CommandReply:
        return self._loadout_reply(Faction.AUTOMATONS)

    def _loadout_reply(self, faction: Faction) -> CommandReply:
        entry = pick_loadout(faction, rng=self._rng)
        return CommandReply(embed=formatters.build_loadout_embed(faction, entry))
