import logging
import os
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from sqlalchemy import Engine, create_engine, delete, event, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from responsebot.models.orm import Base
from responsebot.services.responses.errors import (
    BackendUnavailableError,
    DuplicateNameError,
    NotFoundError,
)
from responsebot.services.responses.models.response import ResponseRecord
from responsebot.services.responses.orm import ResponseORM
from responsebot.services.responses.store.base import ResponseStore

logger = logging.getLogger(__name__)

DATABASE_FILENAME = "responses.sqlite"


def _enable_wal(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def setup_database(storage_path: str) -> Engine:
    """Initialize the database and create necessary directories.

    Returns:
        SQLAlchemy engine instance
    """
    # Ensure data directory exists
    if not os.path.exists(storage_path):
        os.makedirs(storage_path)
        logger.info(f"Created data directory at {storage_path}")

    database_file = os.path.join(storage_path, DATABASE_FILENAME)
    engine = create_engine(
        f"sqlite:///{database_file}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _enable_wal)

    # Create tables and the unique (guild_id, name) index
    Base.metadata.create_all(engine)
    logger.info(f"Local SQLite initialized at {database_file}")

    return engine


class SqliteResponseStore(ResponseStore):
    """Stores responses in a local SQLite file through SQLAlchemy."""

    backend_type = "local"

    def __init__(self, session_factory: Callable[[], Session], engine: Optional[Engine] = None):
        self.session_factory = session_factory
        self.engine = engine

    @classmethod
    def from_directory(cls, storage_path: str) -> "SqliteResponseStore":
        try:
            engine = setup_database(storage_path)
        except (SQLAlchemyError, OSError) as e:
            raise BackendUnavailableError(
                f"Could not open SQLite store at {storage_path}: {e}"
            ) from e
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        return cls(SessionLocal, engine)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.exception(f"SQLite store failed during {operation}")
            raise BackendUnavailableError(
                f"SQLite store failed during {operation}: {e}"
            ) from e

    def insert_unique(
        self, guild_id: str, name: str, trigger: str, response: str, created_at: int
    ) -> ResponseRecord:
        record = ResponseRecord(
            guild_id=guild_id,
            name=name,
            trigger=trigger,
            response=response,
            created_at=created_at,
        )
        with self._session("insert_unique") as session:
            session.add(ResponseORM.from_record(record))
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.info(f"Rejected duplicate response {name} in guild {guild_id}")
                raise DuplicateNameError(guild_id, name) from e
        logger.info(f"Inserted response {name} in guild {guild_id}")
        return record

    def get_by_name(self, guild_id: str, name: str) -> Optional[ResponseRecord]:
        stmt = select(ResponseORM).where(
            ResponseORM.guild_id == guild_id, ResponseORM.name == name
        )
        with self._session("get_by_name") as session:
            row = session.scalars(stmt).one_or_none()
            return row.to_record() if row is not None else None

    def delete_by_name(self, guild_id: str, name: str) -> None:
        stmt = delete(ResponseORM).where(
            ResponseORM.guild_id == guild_id, ResponseORM.name == name
        )
        with self._session("delete_by_name") as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                logger.warning(
                    f"Attempted to delete non-existent response {name} in guild {guild_id}"
                )
                raise NotFoundError(guild_id, name)
            session.commit()
        logger.info(f"Deleted response {name} in guild {guild_id}")

    def update_by_name(
        self, guild_id: str, name: str, trigger: str, response: str
    ) -> None:
        stmt = (
            update(ResponseORM)
            .where(ResponseORM.guild_id == guild_id, ResponseORM.name == name)
            .values(trigger=trigger, response=response)
        )
        with self._session("update_by_name") as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                session.rollback()
                logger.warning(
                    f"Attempted to update non-existent response {name} in guild {guild_id}"
                )
                raise NotFoundError(guild_id, name)
            session.commit()
        logger.info(f"Updated response {name} in guild {guild_id}")

    def list_by_guild(self, guild_id: str) -> List[ResponseRecord]:
        # Insertion id breaks ties between records created in the same millisecond
        stmt = (
            select(ResponseORM)
            .where(ResponseORM.guild_id == guild_id)
            .order_by(ResponseORM.created_at.desc(), ResponseORM.id.desc())
        )
        with self._session("list_by_guild") as session:
            return [row.to_record() for row in session.scalars(stmt).all()]

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("SQLite connections closed")
