import logging
from typing import Any, List, Mapping, Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from responsebot.services.responses.errors import (
    BackendUnavailableError,
    DuplicateNameError,
    NotFoundError,
)
from responsebot.services.responses.models.response import ResponseRecord
from responsebot.services.responses.store.base import ResponseStore

logger = logging.getLogger(__name__)

COLLECTION_NAME = "responses"
DEFAULT_DATABASE_NAME = "discord_bot"
UNIQUE_INDEX_NAME = "guildId_1_name_1"
SERVER_SELECTION_TIMEOUT_MS = 10_000


def _to_record(document: Mapping[str, Any]) -> ResponseRecord:
    return ResponseRecord(
        guild_id=document["guildId"],
        name=document["name"],
        trigger=str(document.get("trigger") or ""),
        response=str(document.get("response") or ""),
        created_at=int(document["createdAt"]),
    )


def ensure_indexes(collection: Collection) -> None:
    """Creates the unique (guildId, name) index. A no-op if it already exists."""
    collection.create_index(
        [("guildId", ASCENDING), ("name", ASCENDING)],
        unique=True,
        name=UNIQUE_INDEX_NAME,
    )


class MongoResponseStore(ResponseStore):
    """Stores responses in a MongoDB collection through pymongo."""

    backend_type = "mongo"

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self.client = client

    @classmethod
    def connect(
        cls, connection_string: str, database_name: Optional[str] = None
    ) -> "MongoResponseStore":
        """Connects, verifies the server answers and prepares the collection."""
        logger.info("Initializing MongoDB storage")
        client = None
        try:
            client = MongoClient(
                connection_string, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS
            )
            client.admin.command("ping")
            if database_name:
                db = client[database_name]
            else:
                db = client.get_default_database(default=DEFAULT_DATABASE_NAME)
            collection = db[COLLECTION_NAME]
            ensure_indexes(collection)
        except PyMongoError as e:
            if client is not None:
                client.close()
            raise BackendUnavailableError(f"Could not connect to MongoDB: {e}") from e

        logger.info(f"MongoDB initialized for DB: {db.name}")
        return cls(collection, client)

    def insert_unique(
        self, guild_id: str, name: str, trigger: str, response: str, created_at: int
    ) -> ResponseRecord:
        document = {
            "guildId": guild_id,
            "name": name,
            "trigger": trigger,
            "response": response,
            "createdAt": created_at,
        }
        try:
            self.collection.insert_one(document)
        except DuplicateKeyError as e:
            logger.info(f"Rejected duplicate response {name} in guild {guild_id}")
            raise DuplicateNameError(guild_id, name) from e
        except PyMongoError as e:
            raise BackendUnavailableError(f"MongoDB insert failed: {e}") from e
        logger.info(f"Inserted response {name} in guild {guild_id}")
        return _to_record(document)

    def get_by_name(self, guild_id: str, name: str) -> Optional[ResponseRecord]:
        try:
            document = self.collection.find_one({"guildId": guild_id, "name": name})
        except PyMongoError as e:
            raise BackendUnavailableError(f"MongoDB lookup failed: {e}") from e
        return _to_record(document) if document is not None else None

    def delete_by_name(self, guild_id: str, name: str) -> None:
        try:
            result = self.collection.delete_one({"guildId": guild_id, "name": name})
        except PyMongoError as e:
            raise BackendUnavailableError(f"MongoDB delete failed: {e}") from e
        if result.deleted_count == 0:
            logger.warning(
                f"Attempted to delete non-existent response {name} in guild {guild_id}"
            )
            raise NotFoundError(guild_id, name)
        logger.info(f"Deleted response {name} in guild {guild_id}")

    def update_by_name(
        self, guild_id: str, name: str, trigger: str, response: str
    ) -> None:
        try:
            result = self.collection.update_one(
                {"guildId": guild_id, "name": name},
                {"$set": {"trigger": trigger, "response": response}},
            )
        except PyMongoError as e:
            raise BackendUnavailableError(f"MongoDB update failed: {e}") from e
        if result.matched_count == 0:
            logger.warning(
                f"Attempted to update non-existent response {name} in guild {guild_id}"
            )
            raise NotFoundError(guild_id, name)
        logger.info(f"Updated response {name} in guild {guild_id}")

    def list_by_guild(self, guild_id: str) -> List[ResponseRecord]:
        # ObjectIds grow with insertion, so _id breaks createdAt ties
        try:
            cursor = self.collection.find({"guildId": guild_id}).sort(
                [("createdAt", DESCENDING), ("_id", DESCENDING)]
            )
            return [_to_record(document) for document in cursor]
        except PyMongoError as e:
            raise BackendUnavailableError(f"MongoDB list failed: {e}") from e

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB connection closed")
