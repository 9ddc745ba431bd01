# database/db_setup.py
from __future__ import annotations

import logging
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from core.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------
# Base class for ORM models
# ---------------------------------------------------------------------
Base = declarative_base()


# ---------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------
def get_engine(url: Optional[str] = None, settings: Optional[Settings] = None) -> Engine:
    """
    Return a SQLAlchemy Engine for the DFDA database.

    In-memory SQLite URLs share one connection across threads so that
    tests and local demos see the same data from every session.

    Example:
        engine = get_engine("sqlite://")
    """
    settings = settings or get_settings()
    url = url or settings.DATABASE_URL

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DB_ECHO, future=True, **kwargs)

    return create_engine(
        url,
        echo=settings.DB_ECHO,
        future=True,
        pool_pre_ping=settings.DB_POOL_PRE_PING,
    )


# ---------------------------------------------------------------------
# Storage client with explicit lifecycle
# ---------------------------------------------------------------------
class Database:
    """
    Owns the engine and session factory.

    Opened once at process start and disposed at shutdown by the backend
    lifespan; handlers receive sessions from it instead of a module global.
    """

    def __init__(self, url: Optional[str] = None, settings: Optional[Settings] = None):
        self._url = url
        self._settings = settings
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> "Database":
        if self.engine is None:
            self.engine = get_engine(self._url, self._settings)
            self._session_factory = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)
            logger.info("Database engine created: %s", self.engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self.engine = None
        self._session_factory = None

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()

    def sessions(self) -> Iterator[Session]:
        """Yield one session and close it afterwards (FastAPI dependency shape)."""
        session = self.session()
        try:
            yield session
        finally:
            session.close()

    def ping(self) -> bool:
        """Run `SELECT 1`; raises on connection failure."""
        with self.session() as session:
            session.execute(text("SELECT 1"))
        return True

    def create_all(self) -> None:
        """Create the mapped tables (local SQLite / tests only)."""
        from . import models  # noqa: F401 - registers mappers on Base

        Base.metadata.create_all(self.engine)
