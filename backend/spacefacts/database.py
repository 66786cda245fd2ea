"""
Space Facts API - Database Handle and Session Management
=========================================================

What:  The `Database` data-access handle (async engine + session factory),
       the declarative Base, and the FastAPI session dependency.
How:   A Database is constructed explicitly at startup (lifespan), stored on
       `app.state.database`, handed to request handlers through Depends(),
       and disposed at shutdown. Nothing connects at import time.
Who:   main.py owns the lifecycle; routes receive sessions via get_db_session.

Session Contract:
    - One AsyncSession per request
    - SQLAlchemy failures roll the session back and surface as DatabaseError
      (HTTP 500); "row absent" is never an exception at this layer
    - The session is always closed, returning its connection to the pool

Connection Pooling:
    PostgreSQL URLs get pool_size / max_overflow / pre_ping / recycle from
    settings. SQLite URLs (tests, local runs) use SQLAlchemy's defaults, and
    in-memory SQLite is pinned to a single StaticPool connection so every
    session sees the same database.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from spacefacts.config import Settings
from spacefacts.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they register with one shared
    metadata object, which Alembic and Database.create_all() read.
    """
    pass


def _engine_options(
    database_url: str,
    pool_size: int,
    max_overflow: int,
    pool_pre_ping: bool,
) -> Dict[str, Any]:
    """Pick engine keyword arguments appropriate for the backend in the URL."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            return {"poolclass": StaticPool}
        return {}
    return {
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": pool_pre_ping,
        "pool_recycle": 3600,
    }


class Database:
    """
    Explicitly constructed data-access handle.

    Lifecycle:
        database = Database.from_settings(settings)   # process start
        async with database.session() as session: ...  # per request
        await database.dispose()                       # process shutdown
    """

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        max_overflow: int = 5,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.database_url = database_url
        self.engine: AsyncEngine = create_async_engine(
            database_url,
            echo=echo,
            **_engine_options(database_url, pool_size, max_overflow, pool_pre_ping),
        )
        # expire_on_commit=False: attributes stay readable after commit, which
        # the routes rely on when serializing the committed row
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a session that rolls back on error and always closes.

        SQLAlchemy exceptions are translated to DatabaseError; every other
        exception (NotFoundError raised by a route, for instance) is re-raised
        untouched after the rollback.
        """
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Database error: %s", str(e))
            raise DatabaseError(context={"error_type": type(e).__name__}) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create every table registered on Base.metadata (idempotent)."""
        # Registers the Planet model on Base.metadata
        from spacefacts.models import planet  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Run SELECT 1; False on any failure."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Health check: database unreachable: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection. Called from the lifespan shutdown."""
        await self.engine.dispose()


# ── FastAPI Dependencies ──────────────────────────────────────────────────

def get_database(request: Request) -> Database:
    """Return the Database handle installed on app.state during startup."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized; was the application lifespan run?")
    return database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Per-request session dependency.

    Example usage in a route:
        @router.get("/planets")
        async def list_planets(db: AsyncSession = Depends(get_db_session)):
            ...

    Writes are committed by the repository, so nothing is pending when the
    session closes here.
    """
    async with get_database(request).session() as session:
        yield session
