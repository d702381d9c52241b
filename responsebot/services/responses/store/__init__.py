from .base import ResponseStore
from .factory import open_store
from .mongo_store import MongoResponseStore
from .sqlite_store import SqliteResponseStore

__all__ = [
    "ResponseStore",
    "open_store",
    "MongoResponseStore",
    "SqliteResponseStore",
]
