from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Awaitable, Callable, List, Optional, Tuple

from responsebot.models.message import IncomingMessage
from responsebot.models.reply import Reply
from responsebot.services.responses import MatchMode, ResponsesManager

if TYPE_CHECKING:
    from responsebot.commands.registry import CommandRegistry


@dataclass
class CommandContext:
    """Collaborators handed to every command."""

    manager: ResponsesManager
    registry: "CommandRegistry"
    prefix: str
    match_mode: MatchMode
    latency: Callable[[], Optional[float]] = field(default=lambda: None)
    """Gateway latency in seconds, None when not connected to a gateway."""


CommandHandler = Callable[[IncomingMessage, List[str], CommandContext], Awaitable[Reply]]


@dataclass(frozen=True)
class Command:
    """A prefixed text command."""

    name: str
    description: str
    execute: CommandHandler
    aliases: Tuple[str, ...] = ()
    usage: Optional[str] = None

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name, *self.aliases)
