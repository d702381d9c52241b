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
from responsebot.models.reply import COLOR_UPDATED, Reply, ReplyPage

logger = logging.getLogger(__name__)


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    denied = check_manage_guild(message, "edit")
    if denied is not None:
        return denied

    name = args[0] if len(args) > 0 else ""
    new_trigger = args[1] if len(args) > 1 else ""
    new_response = " ".join(args[2:])

    if not name or not new_trigger or not new_response:
        return usage_reply(
            f"{ctx.prefix}editresponse [name] [edit_trigger] [edit_response on trigger]",
            f"{ctx.prefix}editresponse greet hi Hey there, updated!",
        )

    try:
        await run_blocking(ctx.manager.edit, message.guild_id, name, new_trigger, new_response)
    except Exception as e:
        logger.error(f"editresponse error: {e}")
        return failure_reply("Failed to update", e)

    page = ReplyPage(
        title="Response updated",
        description=f"**{name}** has been updated.",
        color=COLOR_UPDATED,
        footer=f"Edited by {message.author_name}",
    )
    page.add_field("New Trigger", f"`{new_trigger}`", inline=True)
    page.add_field("New Reply", field_text(new_response))
    return Reply.page(page)


command = Command(
    name="editresponse",
    description="Edit trigger or response text for an existing named response (requires Manage Server).",
    execute=execute,
    aliases=("updateresponse", "modresponse"),
    usage="editresponse [name] [trigger] [response]",
)
