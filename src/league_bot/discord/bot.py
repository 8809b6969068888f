"""Discord client for league commands.

Prefixed messages are handed to the CommandDispatcher on a worker thread so
that waiting on the league state lock and the snapshot write never block the
event loop. Privileged updates also post an audit embed to the configured
admin channel when the guild has one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord
from league_bot.commands.dispatcher import Caller

if TYPE_CHECKING:
    from league_bot.commands.dispatcher import CommandDispatcher
    from league_bot.commands.replies import AuditNotice, Embed, Reply
    from league_bot.config import BotConfig

logger = logging.getLogger(__name__)

# Discord rejects messages and embeds over these lengths.
MESSAGE_LIMIT = 2000
EMBED_TITLE_LIMIT = 256
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_FIELD_NAME_LIMIT = 256
EMBED_FIELD_VALUE_LIMIT = 1024

ERROR_REPLY = "An error occurred while processing your command. Please try again."


def truncate(content: str, max_length: int) -> str:
    """Truncate content to fit a Discord length limit."""
    if len(content) <= max_length:
        return content
    return content[: max_length - 3] + "..."


def to_discord_embed(embed: Embed) -> discord.Embed:
    colour_factory = getattr(discord.Colour, embed.color, discord.Colour.default)
    result = discord.Embed(
        title=truncate(embed.title, EMBED_TITLE_LIMIT),
        description=truncate(embed.description, EMBED_DESCRIPTION_LIMIT) or None,
        colour=colour_factory(),
        timestamp=embed.timestamp,
    )
    for field in embed.fields:
        result.add_field(
            name=truncate(field.name, EMBED_FIELD_NAME_LIMIT) or "\u200b",
            value=truncate(field.value, EMBED_FIELD_VALUE_LIMIT) or "N/A",
            inline=field.inline,
        )
    return result


class LeagueBot(discord.Client):
    """Discord bot answering league commands from chat."""

    def __init__(self, config: BotConfig, dispatcher: CommandDispatcher, **kwargs) -> None:
        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(intents=intents, **kwargs)

        self._config = config
        self._dispatcher = dispatcher

    async def on_ready(self) -> None:
        """Handle bot ready event."""
        logger.info("Bot is ready. Logged in as %s (ID: %s)", self.user, self.user.id if self.user else "unknown")

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.author == self.user:
            return
        if not message.content.startswith(self._config.command_prefix):
            return

        caller = self._caller_for(message)
        try:
            result = await asyncio.to_thread(self._dispatcher.dispatch, message.content, caller)
        except Exception:
            logger.exception("Error handling command from %s: %r", caller.display_name, message.content)
            await self._send_error_reply(message)
            return
        if result is None:
            return

        try:
            await self._send_reply(message, result.reply)
        except discord.HTTPException:
            logger.exception("Failed to send reply to %s: %r", caller.display_name, message.content)
            await self._send_error_reply(message)

        # Audit is posted whether or not the reply was delivered.
        if result.audit is not None:
            await self._send_audit(message, result.audit)

    def _caller_for(self, message: discord.Message) -> Caller:
        # Direct messages come from a User, which has no roles.
        roles = getattr(message.author, "roles", [])
        return Caller(
            display_name=message.author.display_name,
            roles=frozenset(role.name for role in roles),
        )

    async def _send_reply(self, message: discord.Message, reply: Reply) -> None:
        if reply.embed is not None:
            await message.channel.send(embed=to_discord_embed(reply.embed))
        elif reply.text is not None:
            await message.reply(truncate(reply.text, MESSAGE_LIMIT), mention_author=False)

    async def _send_error_reply(self, message: discord.Message) -> None:
        try:
            await message.reply(ERROR_REPLY, mention_author=False)
        except discord.HTTPException:
            logger.exception("Failed to send error reply in channel %s", message.channel.id)

    async def _send_audit(self, message: discord.Message, audit: AuditNotice) -> None:
        if message.guild is None:
            logger.info("Audit for %s skipped: not in a guild", audit.player)
            return

        channel = discord.utils.get(message.guild.text_channels, name=self._config.audit_channel)
        if channel is None:
            logger.info("Audit for %s skipped: no #%s channel", audit.player, self._config.audit_channel)
            return

        try:
            await channel.send(embed=to_discord_embed(audit.to_embed()))
        except discord.HTTPException:
            logger.exception("Failed to post audit notice for %s to #%s", audit.player, channel.name)


def create_bot(config: BotConfig, dispatcher: CommandDispatcher) -> LeagueBot:
    return LeagueBot(config, dispatcher)


async def run_bot(config: BotConfig, dispatcher: CommandDispatcher) -> None:
    """Run the Discord bot until it disconnects."""
    bot = create_bot(config, dispatcher)
    await bot.start(config.bot_token)
