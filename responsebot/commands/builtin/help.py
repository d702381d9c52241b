from typing import List

from responsebot.commands.command import Command, CommandContext
from responsebot.commands.common import chunk, requested_page
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import COLOR_HELP, COLOR_UNAVAILABLE, Reply, ReplyPage

PER_PAGE = 8


def make_page(commands: List[Command], index: int, total: int, prefix: str) -> ReplyPage:
    page = ReplyPage(
        title="Commands",
        description="List of available bot commands",
        color=COLOR_HELP,
        footer=f"Page {index + 1} of {total}",
    )
    for cmd in commands:
        lines = [cmd.description]
        if cmd.aliases:
            lines.append(f"Aliases: {', '.join(cmd.aliases)}")
        if cmd.usage:
            lines.append(f"Usage: `{prefix}{cmd.usage}`")
        page.add_field(f"• {cmd.name}", "\n".join(lines))
    return page


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    commands = ctx.registry.commands()
    if not commands:
        return Reply.page(
            ReplyPage(
                title="No commands found",
                description="There are no commands registered.",
                color=COLOR_UNAVAILABLE,
            )
        )

    chunks = chunk(commands, PER_PAGE)
    pages = [make_page(cmds, i, len(chunks), ctx.prefix) for i, cmds in enumerate(chunks)]

    return Reply(pages=pages, start_page=requested_page(args, len(pages)))


command = Command(
    name="help",
    description="Show a list of commands and basic usage (paginated).",
    execute=execute,
    aliases=("commands", "h"),
    usage="help [page]",
)
