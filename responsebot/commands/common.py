import asyncio
import logging
from typing import Callable, List, TypeVar

from responsebot.models.message import IncomingMessage
from responsebot.models.reply import (
    COLOR_FAILURE,
    COLOR_PERMISSION,
    COLOR_UNAVAILABLE,
    COLOR_USAGE,
    Reply,
    ReplyPage,
)
from responsebot.services.responses import DuplicateNameError, NotFoundError
from responsebot.utils.validator import MessageValidator

logger = logging.getLogger(__name__)

T = TypeVar("T")

EMBED_FIELD_LIMIT = 1024
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


async def run_blocking(func: Callable[..., T], *args) -> T:
    """Runs a blocking store call without stalling the event loop."""
    return await asyncio.to_thread(func, *args)


def guild_only_reply() -> Reply:
    return Reply.page(
        ReplyPage(
            title="Command unavailable",
            description="This command can only be used inside a server.",
            color=COLOR_UNAVAILABLE,
        )
    )


def missing_permission_reply(action: str) -> Reply:
    return Reply.page(
        ReplyPage(
            title="Insufficient permissions",
            description=f"You need the Manage Server permission to {action} responses.",
            color=COLOR_PERMISSION,
        )
    )


def usage_reply(usage: str, example: str = "") -> Reply:
    page = ReplyPage(title="Invalid usage", description=f"Usage: `{usage}`", color=COLOR_USAGE)
    if example:
        page.add_field("Example", f"`{example}`")
    return Reply.page(page)


def failure_reply(title: str, error: Exception) -> Reply:
    # Only name errors carry a message meant for users
    if isinstance(error, (DuplicateNameError, NotFoundError)):
        description = str(error)
    else:
        description = UNEXPECTED_ERROR_MESSAGE
    return Reply.page(ReplyPage(title=title, description=description, color=COLOR_FAILURE))


def check_manage_guild(message: IncomingMessage, action: str):
    """Returns an error reply if the message may not change responses, else None."""
    if message.guild_id is None:
        return guild_only_reply()
    if not message.can_manage_guild:
        return missing_permission_reply(action)
    return None


def field_text(text: str) -> str:
    return MessageValidator.truncate(text, EMBED_FIELD_LIMIT)


def chunk(items: List[T], size: int) -> List[List[T]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def requested_page(args: List[str], total: int) -> int:
    """Zero-based page index from a 1-based `[page]` argument, clamped to the pages there are."""
    try:
        requested = max(1, int(args[0])) if args else 1
    except ValueError:
        requested = 1
    return min(requested - 1, total - 1)
