import math
import time
from typing import List

from responsebot.commands.command import Command, CommandContext
from responsebot.models.message import IncomingMessage
from responsebot.models.reply import COLOR_PING, Reply, ReplyPage


async def execute(message: IncomingMessage, args: List[str], ctx: CommandContext) -> Reply:
    handling_ms = round((time.monotonic() - message.received_at) * 1000)
    latency = ctx.latency()

    page = ReplyPage(title="Pong!", color=COLOR_PING, footer=f"Requested by {message.author_name}")
    page.add_field("Handling time", f"{handling_ms} ms", inline=True)
    # discord.py reports inf until the first heartbeat
    if latency is None or not math.isfinite(latency):
        page.add_field("Gateway (WS) ping", "n/a", inline=True)
    else:
        page.add_field("Gateway (WS) ping", f"{round(latency * 1000)} ms", inline=True)
    return Reply.page(page)


command = Command(
    name="ping",
    description="Check bot latency and websocket heartbeat.",
    execute=execute,
    aliases=("pong",),
    usage="ping",
)
