"""Database setup helpers (SQLAlchemy engine/session)."""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import InterfaceError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from app.config import Settings
from app.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_write_locks(engine) -> None:
    """Make every SQLite transaction take the write lock up front.

    SQLite ignores FOR UPDATE, so BEGIN IMMEDIATE is what serializes
    concurrent read-modify-write transactions.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Database:
    """Connection pool plus session factory for the catalog store.

    Built once at startup and passed to whatever needs the store.
    """

    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine = create_engine(url, future=True, pool_pre_ping=True, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            _enable_sqlite_write_locks(self.engine)
        self._session_factory = sessionmaker(autoflush=False, bind=self.engine, future=True)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.database_url
        if url.startswith("sqlite"):
            return cls(url, connect_args={"check_same_thread": False})
        return cls(
            url,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
            pool_recycle=settings.DB_POOL_RECYCLE_SECONDS,
        )

    @contextmanager
    def _session_scope(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Scoped unit of work: commit on success, roll back on any error.

        Connection, pool and commit failures are raised as StoreUnavailableError.
        """
        try:
            with self._session_scope() as session:
                yield session
        except (OperationalError, InterfaceError, PoolTimeoutError) as e:
            logger.error(f"Store transaction failed: {e}")
            raise StoreUnavailableError("The movie store is currently unavailable.") from e

    def ping(self) -> None:
        """Round-trip a trivial query; raises StoreUnavailableError on failure."""
        with self.transaction() as session:
            session.execute(text("SELECT 1"))

    def create_tables(self) -> None:
        # Import models so they register on Base.metadata
        from app.infrastructure.persistence import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()
