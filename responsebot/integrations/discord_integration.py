import logging
import discord
from discord import Intents

from responsebot.integrations.paginator import PaginatorView, render_embed
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import Reply
from responsebot.orchestrator.dispatcher import MessageDispatcher
from responsebot.utils.validator import MessageValidator

logger = logging.getLogger(__name__)


class DiscordIntegration(discord.Client):
    """Discord bot integration that runs prefixed commands and trigger responses."""

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        validator: MessageValidator,
        *args,
        **kwargs,
    ):
        # Set up required intents
        intents = Intents.default()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True
        super().__init__(intents=intents, *args, **kwargs)

        self.dispatcher = dispatcher
        self.validator = validator
        self.dispatcher.latency = lambda: self.latency

    async def setup_hook(self):
        """Called when the client is done preparing data"""
        logger.info("Discord bot is setting up")

    async def on_ready(self):
        """Called when the bot is ready and connected to Discord"""
        logger.info(f"Logged in as {self.user} ({len(self.guilds)} guilds)")

    def to_incoming(self, message: discord.Message) -> IncomingMessage:
        can_manage_guild = False
        if message.guild is not None and isinstance(message.author, discord.Member):
            can_manage_guild = message.author.guild_permissions.manage_guild

        return IncomingMessage(
            content=message.content,
            author_id=str(message.author.id),
            author_name=str(message.author),
            guild_id=str(message.guild.id) if message.guild is not None else None,
            author_is_bot=message.author.bot,
            can_manage_guild=can_manage_guild,
        )

    async def on_message(self, message: discord.Message):
        """Handle incoming messages"""
        # Ignore messages from the bot itself and other bots
        if message.author.bot:
            return

        try:
            replies = await self.dispatcher.dispatch(self.to_incoming(message))
            for reply in replies:
                await self.send_reply(message, reply)
        except Exception as e:
            logger.exception(f"Error processing Discord message: {e}")

    async def send_reply(self, message: discord.Message, reply: Reply):
        if reply.content is not None:
            # Stored responses are sent verbatim to the channel
            for chunk in self.validator.validate_message(reply.content):
                await message.channel.send(chunk)
            return

        if not reply.pages:
            return

        if not reply.is_paginated:
            await message.reply(embed=render_embed(reply.pages[0]))
            return

        view = PaginatorView(reply, author_id=message.author.id)
        view.message = await message.reply(embed=view.current, view=view)

    async def start_bot(self, token: str):
        """Start the Discord bot with the given token"""
        logger.info("Starting Discord integration")
        try:
            await self.start(token)
        except Exception as e:
            logger.exception(f"Failed to start Discord bot: {e}")
            raise
