import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from fastapi import Request
from sqlalchemy import Column, DateTime, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.logging_config import logger

# Volatile by design: the whole dataset lives in one in-memory SQLite
# connection and disappears with the process.
DATABASE_URL = "sqlite://"


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (SQLite stores no offset)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass

class TimestampMixin:
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class Store:
    """
    Process-local datastore with exclusive-ownership semantics.

    All reads and writes go through ``transaction()``, which holds the store
    lock for the complete unit of work: open a session, run the work, commit
    (or roll back) and close. Units of work therefore never interleave, which
    keeps multi-step checks such as "count notes, then insert" atomic and
    keeps the single shared SQLite connection to one thread at a time.

    Transactions must not be nested.
    """

    def __init__(self, url: str = DATABASE_URL):
        self.engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,  # every session shares the one in-memory database
            echo=False,
            future=True,
        )
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,  # returned objects stay readable after the lock is released
            bind=self.engine,
            future=True,
        )
        self._lock = threading.Lock()

        # Register every table on Base.metadata before creating the schema
        from app import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("In-memory datastore initialised")

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        with self._lock:
            db = self.SessionLocal()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def dispose(self) -> None:
        self.engine.dispose()


def get_store(request: Request) -> Store:
    """FastAPI dependency returning the store owned by the running app."""
    return request.app.state.store
