import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class IncomingMessage:
    """A text message received from an integration."""

    content: str
    """Raw message text."""

    author_id: str
    """ID of the message author."""

    author_name: str
    """Human readable name of the author."""

    guild_id: Optional[str] = None
    """Guild the message was sent in, None for direct messages."""

    author_is_bot: bool = False
    """Whether the author is a bot account."""

    can_manage_guild: bool = False
    """Whether the author holds the Manage Server permission in the guild."""

    received_at: float = field(default_factory=time.monotonic)
    """Monotonic clock reading taken when the message was received."""
