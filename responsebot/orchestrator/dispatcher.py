import logging
from typing import Callable, List, Optional

from responsebot.commands.command import CommandContext
from responsebot.commands.common import run_blocking
from responsebot.commands.registry import CommandRegistry
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import Reply
from responsebot.services.responses import MatchMode, ResponsesManager
from responsebot.utils.logging.request_id_filter import RequestIdContextManager

logger = logging.getLogger(__name__)


class MessageDispatcher:
    """Routes incoming messages to commands, falling back to trigger matching."""

    def __init__(
        self,
        manager: ResponsesManager,
        registry: CommandRegistry,
        prefix: str,
        match_mode: MatchMode,
        request_id_context_manager: Optional[RequestIdContextManager] = None,
        latency: Callable[[], Optional[float]] = lambda: None,
    ):
        self.manager = manager
        self.registry = registry
        self.prefix = prefix
        self.match_mode = MatchMode(match_mode)
        self.request_id_context_manager = request_id_context_manager
        self.latency = latency

    def make_context(self) -> CommandContext:
        return CommandContext(
            manager=self.manager,
            registry=self.registry,
            prefix=self.prefix,
            match_mode=self.match_mode,
            latency=self.latency,
        )

    def parse_command(self, content: str) -> Optional[tuple[str, List[str]]]:
        """Splits prefixed content into an invoked name and its arguments."""
        if not content.startswith(self.prefix):
            return None
        parts = content[len(self.prefix) :].split()
        if not parts:
            return None
        return parts[0].lower(), parts[1:]

    async def dispatch(self, message: IncomingMessage) -> List[Reply]:
        """Returns the replies to send for a message, possibly none."""
        if message.author_is_bot:
            return []

        if self.request_id_context_manager is None:
            return await self._dispatch(message)
        with self.request_id_context_manager:
            return await self._dispatch(message)

    async def _dispatch(self, message: IncomingMessage) -> List[Reply]:
        parsed = self.parse_command(message.content)
        if parsed is not None:
            invoked, args = parsed
            command = self.registry.get(invoked)
            if command is not None:
                logger.info(f"Running command {command.name} for {message.author_name}")
                try:
                    return [await command.execute(message, args, self.make_context())]
                except Exception as e:
                    logger.exception(f"Command execution error: {e}")
                    return [Reply.text(f"Error: {e}")]

        # Trigger matching for normal messages
        if message.guild_id is None:
            return []

        try:
            matched = await run_blocking(
                self.manager.find_match, message.guild_id, message.content, self.match_mode
            )
        except Exception as e:
            logger.exception(f"Error in message handler: {e}")
            return []

        if matched is None:
            return []
        logger.info(f"Trigger {matched.name} matched in guild {message.guild_id}")
        return [Reply.text(matched.response)]
