import logging
import time
from contextlib import nullcontext
from typing import Callable, List, Optional

from responsebot.services.responses.errors import (
    DuplicateNameError,
    InvalidPatternError,
    NotFoundError,
)
from responsebot.services.responses.matching import trigger_matches
from responsebot.services.responses.models.match_mode import MatchMode
from responsebot.services.responses.models.response import ResponseRecord
from responsebot.services.responses.store.base import ResponseStore
from responsebot.utils.logging.metrics import MetricsLogger

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "A response with that name already exists."
NOT_FOUND_MESSAGE = "No such response."


def now_ms() -> int:
    return int(time.time() * 1000)


class ResponsesManager:
    """Guild-scoped access to stored responses and trigger matching.

    Every call goes to the store; nothing is cached. Calls block on I/O, so async
    callers should run them in a worker thread.
    """

    def __init__(
        self,
        store: ResponseStore,
        metrics_logger: Optional[MetricsLogger] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.store = store
        self.metrics_logger = metrics_logger
        self.clock = clock or now_ms

    def _instrument(self, operation: str):
        if self.metrics_logger is None:
            return nullcontext()
        return self.metrics_logger.instrumenter(f"ResponsesManager.{operation}")

    def add(self, guild_id: str, name: str, trigger: str, response: str) -> ResponseRecord:
        with self._instrument("add"):
            try:
                record = self.store.insert_unique(
                    guild_id, name, trigger, response, self.clock()
                )
            except DuplicateNameError as e:
                raise DuplicateNameError(guild_id, name, DUPLICATE_NAME_MESSAGE) from e
            logger.info(f"Added response {name} in guild {guild_id}")
            return record

    def edit(self, guild_id: str, name: str, trigger: str, response: str) -> None:
        with self._instrument("edit"):
            try:
                self.store.update_by_name(guild_id, name, trigger, response)
            except NotFoundError as e:
                raise NotFoundError(guild_id, name, NOT_FOUND_MESSAGE) from e
            logger.info(f"Edited response {name} in guild {guild_id}")

    def remove(self, guild_id: str, name: str) -> None:
        with self._instrument("remove"):
            try:
                self.store.delete_by_name(guild_id, name)
            except NotFoundError as e:
                raise NotFoundError(guild_id, name, NOT_FOUND_MESSAGE) from e
            logger.info(f"Removed response {name} in guild {guild_id}")

    def get(self, guild_id: str, name: str) -> Optional[ResponseRecord]:
        with self._instrument("get"):
            return self.store.get_by_name(guild_id, name)

    def list(self, guild_id: str) -> List[ResponseRecord]:
        with self._instrument("list"):
            return self.store.list_by_guild(guild_id)

    def find_match(
        self, guild_id: str, content: str, mode: MatchMode = MatchMode.EXACT
    ) -> Optional[ResponseRecord]:
        """Returns the newest response whose trigger matches the content, if any.

        Records come newest first, so when several triggers match the most
        recently created one wins. A trigger that is not a valid regex is
        skipped with a warning.
        """
        mode = MatchMode(mode)
        with self._instrument("find_match") as instrumenter:
            records = self.store.list_by_guild(guild_id)
            for record in records:
                try:
                    matched = trigger_matches(record.trigger or "", content, mode)
                except InvalidPatternError as e:
                    logger.warning(f"Invalid regex for {record.name}: {e.reason}")
                    continue
                if matched:
                    logger.debug(f"Message in guild {guild_id} matched {record.name}")
                    if instrumenter is not None:
                        instrumenter.add_metric("matched", 1)
                    return record
            if instrumenter is not None:
                instrumenter.add_metric("matched", 0)
            return None
