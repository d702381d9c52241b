from dataclasses import dataclass


@dataclass(frozen=True)
class ResponseRecord:
    """A named trigger/response pair stored for a guild."""

    guild_id: str
    """Guild the response belongs to."""

    name: str
    """Name of the response, unique within the guild."""

    trigger: str
    """Text or pattern that fires the response."""

    response: str
    """Text sent back when the trigger matches."""

    created_at: int
    """Creation time in milliseconds since the epoch."""
