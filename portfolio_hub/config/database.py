"""Database engine and session management"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one process.

    Construct once at startup and pass the instance to whatever needs a
    session; nothing in the package creates engines on import.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.engine: Engine = self._build_engine(url, echo=echo)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)

    @staticmethod
    def _build_engine(url: str, *, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            kwargs: dict = {"connect_args": {"check_same_thread": False}}
            # In-memory databases only exist on a single connection
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, echo=echo, **kwargs)
        return create_engine(url, echo=echo, pool_pre_ping=True)

    def create_all(self) -> None:
        # Import models so they register on Base.metadata
        import portfolio_hub.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ensured", extra={"dialect": self.engine.dialect.name})

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
