import logging
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

# Each asyncio task runs in its own copy of the context, so concurrent
# message handlers never see each other's request ID.
_current_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Filters log records and adds the current request ID to the record if it exists."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _current_request_id.get() or ""
        return True

    @property
    def current_request_id(self) -> Optional[str]:
        return _current_request_id.get()

    def set_request_id(self, request_id: Optional[str]):
        _current_request_id.set(request_id)


class RequestIdContextManager:
    """Context manager that sets the current request ID and resets it when exiting."""

    def __init__(self, request_id_filter: RequestIdFilter):
        self.request_id_filter = request_id_filter

    def __enter__(self):
        self.request_id_filter.set_request_id(uuid4().hex[:10])
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.request_id_filter.set_request_id(None)
