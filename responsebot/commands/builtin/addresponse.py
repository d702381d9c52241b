import logging
from typing import List

from responsebot.commands.command import Command, CommandContext
from responsebot.commands.common import (
    check_manage_guild,
    failure_reply,
    field_text,
    run_blocking,
    usage_reply,
)
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import COLOR_SUCCESS, Reply, ReplyPage

logger = logging.getLogger(__name__)


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    denied = check_manage_guild(message, "add")
    if denied is not None:
        return denied

    # name trigger response...
    name = args[0] if len(args) > 0 else ""
    trigger = args[1] if len(args) > 1 else ""
    response_text = " ".join(args[2:])

    if not name or not trigger or not response_text:
        return usage_reply(
            f"{ctx.prefix}addresponse [name] [trigger] [response on trigger]",
            f"{ctx.prefix}addresponse greet hello Hello there, welcome!",
        )

    try:
        await run_blocking(ctx.manager.add, message.guild_id, name, trigger, response_text)
    except Exception as e:
        logger.error(f"addresponse error: {e}")
        return failure_reply("Failed to add response", e)

    page = ReplyPage(
        title="Response added",
        description=f"**{name}** has been saved.",
        color=COLOR_SUCCESS,
        footer=f"Added by {message.author_name}",
    )
    page.add_field("Trigger", f"`{trigger}`", inline=True)
    page.add_field("Reply", field_text(response_text))
    return Reply.page(page)


command = Command(
    name="addresponse",
    description="Add a named trigger-response pair (requires Manage Server).",
    execute=execute,
    usage="addresponse [name] [trigger] [response]",
)
