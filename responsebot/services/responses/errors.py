from typing import Optional


class ResponseStoreError(Exception):
    """Base class for errors raised by response stores and the responses manager."""


class DuplicateNameError(ResponseStoreError):
    """A response with the same (guild_id, name) already exists."""

    def __init__(self, guild_id: str, name: str, message: Optional[str] = None):
        self.guild_id = guild_id
        self.name = name
        super().__init__(message or f"Response {name!r} already exists in guild {guild_id}")


class NotFoundError(ResponseStoreError):
    """No response exists for (guild_id, name)."""

    def __init__(self, guild_id: str, name: str, message: Optional[str] = None):
        self.guild_id = guild_id
        self.name = name
        super().__init__(message or f"Response {name!r} not found in guild {guild_id}")


class InvalidPatternError(ResponseStoreError):
    """A trigger could not be compiled as a regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid regex {pattern!r}: {reason}")


class BackendUnavailableError(ResponseStoreError):
    """The backing store could not be reached or failed mid-operation."""
