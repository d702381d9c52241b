from typing import List, Optional

import discord
from discord import ui

from responsebot.models.reply import Reply, ReplyPage

TIMEOUT_SECONDS = 120


def render_embed(page: ReplyPage) -> discord.Embed:
    embed = discord.Embed(
        title=page.title,
        description=page.description or None,
        color=page.color,
    )
    for reply_field in page.fields:
        embed.add_field(name=reply_field.name, value=reply_field.value, inline=reply_field.inline)
    if page.footer:
        embed.set_footer(text=page.footer)
    return embed


class PaginatorView(ui.View):
    """First/previous/stop/next/last controls over a list of embeds.

    Only the user who ran the command can press the buttons. The controls are
    disabled when stopped or after the timeout.
    """

    def __init__(self, reply: Reply, author_id: int, timeout: float = TIMEOUT_SECONDS):
        super().__init__(timeout=timeout)
        self.embeds: List[discord.Embed] = [render_embed(page) for page in reply.pages]
        self.index = min(max(0, reply.start_page), len(self.embeds) - 1)
        self.author_id = author_id
        self.message: Optional[discord.Message] = None

    @property
    def current(self) -> discord.Embed:
        return self.embeds[self.index]

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.author_id:
            await interaction.response.send_message(
                "Only the command author can control this panel.", ephemeral=True
            )
            return False
        return True

    async def _show(self, interaction: discord.Interaction, index: int) -> None:
        self.index = min(max(0, index), len(self.embeds) - 1)
        await interaction.response.edit_message(embed=self.current, view=self)

    @ui.button(label="⏮️", style=discord.ButtonStyle.primary)
    async def first_button(self, interaction: discord.Interaction, button: ui.Button["PaginatorView"]) -> None:
        await self._show(interaction, 0)

    @ui.button(label="◀️", style=discord.ButtonStyle.secondary)
    async def prev_button(self, interaction: discord.Interaction, button: ui.Button["PaginatorView"]) -> None:
        await self._show(interaction, self.index - 1)

    @ui.button(label="⏹️", style=discord.ButtonStyle.danger)
    async def stop_button(self, interaction: discord.Interaction, button: ui.Button["PaginatorView"]) -> None:
        self._disable_all()
        await interaction.response.edit_message(embed=self.current, view=self)
        self.stop()

    @ui.button(label="▶️", style=discord.ButtonStyle.secondary)
    async def next_button(self, interaction: discord.Interaction, button: ui.Button["PaginatorView"]) -> None:
        await self._show(interaction, self.index + 1)

    @ui.button(label="⏭️", style=discord.ButtonStyle.primary)
    async def last_button(self, interaction: discord.Interaction, button: ui.Button["PaginatorView"]) -> None:
        await self._show(interaction, len(self.embeds) - 1)

    def _disable_all(self) -> None:
        for item in self.children:
            if isinstance(item, ui.Button):
                item.disabled = True

    async def on_timeout(self) -> None:
        self._disable_all()
        if self.message is None:
            return
        try:
            await self.message.edit(embed=self.current, view=self)
        except discord.HTTPException:
            # Message deleted or no longer editable
            pass
