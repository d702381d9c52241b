import logging
from typing import List

from responsebot.commands.command import Command, CommandContext
from responsebot.commands.common import (
    chunk,
    failure_reply,
    guild_only_reply,
    requested_page,
    run_blocking,
)
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import COLOR_EMPTY, COLOR_PANEL, Reply, ReplyPage
from responsebot.utils.validator import MessageValidator

logger = logging.getLogger(__name__)

PER_PAGE = 6
REPLY_PREVIEW_LIMIT = 256


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    if message.guild_id is None:
        return guild_only_reply()

    try:
        items = await run_blocking(ctx.manager.list, message.guild_id)
    except Exception as e:
        logger.error(f"responsepanel error: {e}")
        return failure_reply("Failed to load responses", e)

    if not items:
        return Reply.page(
            ReplyPage(
                title="No responses",
                description="There are no saved responses for this server yet.",
                color=COLOR_EMPTY,
            )
        )

    chunks = chunk(items, PER_PAGE)
    pages = []
    for index, records in enumerate(chunks):
        page = ReplyPage(
            title="Response Panel",
            description=f"Total responses: **{len(items)}**",
            color=COLOR_PANEL,
            footer=f"Page {index + 1} of {len(chunks)}",
        )
        for record in records:
            preview = MessageValidator.truncate(record.response, REPLY_PREVIEW_LIMIT)
            page.add_field(f"• {record.name}", f"Trigger: `{record.trigger}`\nReply: {preview}")
        pages.append(page)

    return Reply(pages=pages, start_page=requested_page(args, len(pages)))


command = Command(
    name="responsepanel",
    description="Show all saved responses for this server in a paginated embed with controls.",
    execute=execute,
    aliases=("responses", "responselist", "rp"),
    usage="responsepanel [page]",
)
