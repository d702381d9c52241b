from dataclasses import dataclass, field
from typing import List, Optional

# Embed colours
COLOR_SUCCESS = 0x2ECC71
COLOR_UPDATED = 0xF1C40F
COLOR_REMOVED = 0xE74C3C
COLOR_UNAVAILABLE = 0xE74C3C
COLOR_PERMISSION = 0xE67E22
COLOR_USAGE = 0x3498DB
COLOR_FAILURE = 0xC0392B
COLOR_EMPTY = 0x95A5A6
COLOR_PANEL = 0x5865F2
COLOR_HELP = 0x00B894
COLOR_PING = 0x2ECC71


@dataclass
class ReplyField:
    name: str
    value: str
    inline: bool = False


@dataclass
class ReplyPage:
    """An embed-like block of a reply."""

    title: str
    description: str = ""
    color: int = COLOR_USAGE
    fields: List[ReplyField] = field(default_factory=list)
    footer: Optional[str] = None

    def add_field(self, name: str, value: str, inline: bool = False) -> "ReplyPage":
        self.fields.append(ReplyField(name=name, value=value, inline=inline))
        return self

    def to_text(self) -> str:
        lines = [self.title]
        if self.description:
            lines.append(self.description)
        for reply_field in self.fields:
            lines.append(f"{reply_field.name}: {reply_field.value}")
        if self.footer:
            lines.append(f"({self.footer})")
        return "\n".join(lines)


@dataclass
class Reply:
    """What an integration should send back.

    Either plain `content`, or one or more `pages` shown one at a time.
    """

    content: Optional[str] = None
    pages: List[ReplyPage] = field(default_factory=list)
    start_page: int = 0

    @classmethod
    def text(cls, content: str) -> "Reply":
        return cls(content=content)

    @classmethod
    def page(cls, page: ReplyPage) -> "Reply":
        return cls(pages=[page])

    @property
    def is_paginated(self) -> bool:
        return len(self.pages) > 1

    def to_text(self) -> str:
        if self.content is not None:
            return self.content
        return "\n\n".join(page.to_text() for page in self.pages)
