from .errors import (
    BackendUnavailableError,
    DuplicateNameError,
    InvalidPatternError,
    NotFoundError,
    ResponseStoreError,
)
from .models.match_mode import MatchMode
from .models.response import ResponseRecord
from .service import ResponsesManager
from .store import ResponseStore, open_store

__all__ = [
    "BackendUnavailableError",
    "DuplicateNameError",
    "InvalidPatternError",
    "NotFoundError",
    "ResponseStoreError",
    "MatchMode",
    "ResponseRecord",
    "ResponsesManager",
    "ResponseStore",
    "open_store",
]
