"""discord.py client wiring slash commands to the dispatcher."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import discord
from discord import app_commands

from .commands import CommandDispatcher, CommandReply, CommandSpec

LOGGER = logging.getLogger(__name__)

UNKNOWN_COMMAND_MESSAGE = "Unknown command."


class WarCommandTree(app_commands.CommandTree):
    """Command tree that answers interactions for unregistered commands."""

    async def on_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ) -> None:
        if isinstance(error, app_commands.CommandNotFound):
            LOGGER.warning("Interaction for unregistered command: %s", error.name)
            if not interaction.response.is_done():
                await interaction.response.send_message(
                    UNKNOWN_COMMAND_MESSAGE, ephemeral=True
                )
            return

        command = interaction.command
        LOGGER.error(
            "Unhandled error in command %s",
            command.name if command is not None else "<unknown>",
            exc_info=error,
        )


async def send_reply(followup: Any, reply: CommandReply) -> None:
    kwargs: Dict[str, Any] = {}
    if reply.content is not None:
        kwargs["content"] = reply.content
    if reply.embed is not None:
        kwargs["embed"] = reply.embed
    await followup.send(**kwargs)


class WarBotClient(discord.Client):
    """Discord client exposing one argument-less slash command per spec."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        *,
        application_id: Optional[int] = None,
        intents: Optional[discord.Intents] = None,
    ) -> None:
        super().__init__(
            intents=intents or discord.Intents.default(),
            application_id=application_id,
        )
        self._dispatcher = dispatcher
        self.commands_registered = False
        self.tree = WarCommandTree(self)
        for spec in dispatcher.specs:
            self.tree.add_command(self._build_command(spec))

    def _build_command(self, spec: CommandSpec) -> app_commands.Command:
        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_interaction(interaction, spec.name)

        return app_commands.Command(
            name=spec.name, description=spec.description, callback=callback
        )

    async def setup_hook(self) -> None:
        LOGGER.info("Registering slash commands...")
        try:
            synced = await self.tree.sync()
        except discord.DiscordException as exc:
            # Bot stays connected without commands; restart to retry.
            LOGGER.error("Error registering slash commands: %s", exc, exc_info=True)
            return
        self.commands_registered = True
        LOGGER.info("Registered %d slash commands", len(synced))

    async def on_ready(self) -> None:
        LOGGER.info("Logged in as %s", self.user)

    async def handle_interaction(
        self, interaction: discord.Interaction, command_name: str
    ) -> None:
        """Acknowledge the interaction, run the command and send one follow-up."""

        try:
            await interaction.response.defer(thinking=True)
        except discord.HTTPException as exc:
            LOGGER.warning("Could not acknowledge /%s: %s", command_name, exc)
            return

        reply = await self._dispatcher.dispatch(command_name)

        try:
            await send_reply(interaction.followup, reply)
        except discord.HTTPException as exc:
            LOGGER.error("Failed to send reply for /%s: %s", command_name, exc)
