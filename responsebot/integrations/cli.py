import asyncio
import logging

from responsebot.models.message import IncomingMessage
from responsebot.orchestrator.dispatcher import MessageDispatcher

logger = logging.getLogger(__name__)

CLI_GUILD_ID = "cli"


class CliIntegration:
    """Runs the application in CLI.

    Every line read from stdin is treated as a message sent in a single local
    guild by a user allowed to manage it.
    """

    def __init__(
        self,
        dispatcher: MessageDispatcher,
        user_name: str,
        guild_id: str = CLI_GUILD_ID,
    ):
        self.dispatcher = dispatcher
        self.user_name = user_name
        self.guild_id = guild_id

    async def start(self):
        logger.info("Starting CLI Integration")

        while True:
            try:
                # Use asyncio.to_thread for blocking input() operation
                line = await asyncio.to_thread(input, f"{self.user_name}: ")
            except EOFError:
                logger.info("CLI Integration reached end of input")
                break
            except (asyncio.CancelledError, KeyboardInterrupt):
                logger.info("CLI Integration received shutdown signal")
                break

            if not line.strip():
                continue

            try:
                message = IncomingMessage(
                    content=line,
                    author_id=self.user_name,
                    author_name=self.user_name,
                    guild_id=self.guild_id,
                    can_manage_guild=True,
                )
                for reply in await self.dispatcher.dispatch(message):
                    print("Bot: " + reply.to_text())
            except Exception as e:
                logger.exception(f"Error in chat loop: {e}")
                print("An error occurred: " + str(e))

        logger.info("CLI Integration stopped")
