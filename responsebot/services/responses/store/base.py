from abc import ABC, abstractmethod
from typing import List, Optional

from responsebot.services.responses.models.response import ResponseRecord


class ResponseStore(ABC):
    """Persistence backend for guild-scoped responses.

    Implementations must enforce uniqueness of (guild_id, name) in the storage
    layer itself, so concurrent writers cannot both insert the same name.
    """

    backend_type: str = ""
    """Tag naming the backend, e.g. "local" or "mongo"."""

    @abstractmethod
    def insert_unique(
        self, guild_id: str, name: str, trigger: str, response: str, created_at: int
    ) -> ResponseRecord:
        """Persists a new record.

        Raises:
            DuplicateNameError: (guild_id, name) already exists. Nothing is written.
        """

    @abstractmethod
    def get_by_name(self, guild_id: str, name: str) -> Optional[ResponseRecord]:
        """Returns the record or None if it does not exist."""

    @abstractmethod
    def delete_by_name(self, guild_id: str, name: str) -> None:
        """Removes exactly one record.

        Raises:
            NotFoundError: no record matched.
        """

    @abstractmethod
    def update_by_name(
        self, guild_id: str, name: str, trigger: str, response: str
    ) -> None:
        """Overwrites the trigger and response of an existing record.

        Raises:
            NotFoundError: no record matched.
        """

    @abstractmethod
    def list_by_guild(self, guild_id: str) -> List[ResponseRecord]:
        """Returns every record of the guild, newest first."""

    def close(self) -> None:
        """Releases connections held by the backend."""
