import logging
import os
from typing import Optional

from responsebot.services.responses.store.base import ResponseStore
from responsebot.services.responses.store.mongo_store import MongoResponseStore
from responsebot.services.responses.store.sqlite_store import SqliteResponseStore

logger = logging.getLogger(__name__)

MONGO_PREFIXES = ("mongodb://", "mongodb+srv://")


def is_mongo_target(target: str) -> bool:
    return target.startswith(MONGO_PREFIXES)


def open_store(target: str, database_name: Optional[str] = None) -> ResponseStore:
    """Opens the backend named by the storage target.

    A MongoDB connection string selects the MongoDB backend; anything else is a
    local directory for the SQLite file, resolved against the working directory.

    Raises:
        BackendUnavailableError: the backend could not be opened.
    """
    if is_mongo_target(target):
        return MongoResponseStore.connect(target, database_name)

    storage_path = os.path.abspath(target)
    logger.info(f"Initializing local storage at {storage_path}")
    return SqliteResponseStore.from_directory(storage_path)
