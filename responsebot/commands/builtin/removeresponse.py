import logging
from typing import List

from responsebot.commands.command import Command, CommandContext
from responsebot.commands.common import (
    check_manage_guild,
    failure_reply,
    run_blocking,
    usage_reply,
)
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import COLOR_REMOVED, Reply, ReplyPage

logger = logging.getLogger(__name__)


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    denied = check_manage_guild(message, "remove")
    if denied is not None:
        return denied

    name = args[0] if args else ""
    if not name:
        return usage_reply(f"{ctx.prefix}removeresponse [name]")

    try:
        await run_blocking(ctx.manager.remove, message.guild_id, name)
    except Exception as e:
        logger.error(f"removeresponse error: {e}")
        return failure_reply("Failed to remove", e)

    return Reply.page(
        ReplyPage(
            title="Response removed",
            description=f"**{name}** has been removed.",
            color=COLOR_REMOVED,
            footer=f"Removed by {message.author_name}",
        )
    )


command = Command(
    name="removeresponse",
    description="Remove a named response (requires Manage Server).",
    execute=execute,
    aliases=("removeres", "delresponse", "deleteresponse"),
    usage="removeresponse [name]",
)
