"""
Engine and transaction management for the relational store.

Every ledger mutation runs inside ``Database.transaction()``. On SQLite
each transaction is opened with ``BEGIN IMMEDIATE`` so writers are
serialized by the database file lock; on other backends callers can ask
for SERIALIZABLE isolation and retry serialization failures with
``run_with_retry``.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, TypeVar

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.db.models import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _prepare_sqlite_path(url: str) -> None:
    database = make_url(url).database
    if database and database != ":memory:":
        directory = os.path.dirname(os.path.abspath(database))
        os.makedirs(directory, exist_ok=True)


def build_engine(url: str, busy_timeout_sec: float = 30.0) -> Engine:
    """Create an engine; SQLite gets immediate-mode transactions."""
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    _prepare_sqlite_path(url)
    kwargs: dict[str, Any] = {
        "connect_args": {"check_same_thread": False, "timeout": busy_timeout_sec},
    }
    if make_url(url).database in (None, "", ":memory:"):
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        # pysqlite's implicit BEGIN is replaced by the explicit one below
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


class Database:
    """Owns the engine and hands out transactional sessions."""

    def __init__(self, url: str, busy_timeout_sec: float = 30.0) -> None:
        self.url = url
        self.engine = build_engine(url, busy_timeout_sec)
        self._session_factory = sessionmaker(
            bind=self.engine, autoflush=False, expire_on_commit=False
        )

    @property
    def is_sqlite(self) -> bool:
        return self.engine.dialect.name == "sqlite"

    def create_all(self) -> None:
        Base.metadata.create_all(bind=self.engine)
        logger.info("Schema ready on %s", self.engine.dialect.name)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def transaction(self, serializable: bool = False) -> Iterator[Session]:
        """Yield a session whose work commits on exit and rolls back on any error."""
        session = self._session_factory()
        if serializable and not self.is_sqlite:
            session.connection(execution_options={"isolation_level": "SERIALIZABLE"})
        try:
            yield session
            session.commit()
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()


def run_with_retry(
    func: Callable[[], T], *, attempts: int = 3, backoff_base: float = 0.05
) -> T:
    """
    Execute a transactional operation, retrying lock and serialization failures.

    ``func`` must open its own transaction so every attempt starts clean.
    """
    for attempt in range(attempts):
        try:
            return func()
        except OperationalError as exc:
            if attempt >= attempts - 1:
                raise
            logger.warning(
                "Transaction conflict (attempt %d/%d): %s", attempt + 1, attempts, exc.orig
            )
            time.sleep(backoff_base * (2 ** attempt))
    raise RuntimeError("run_with_retry called with attempts < 1")
