"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions and driver socket errors (OSError) mapped to
      DatabaseError (core/errors.py)
    - Startup connect retries with exponential backoff, then raises (fail fast)

Design Decisions:
    - Manager constructed by the lifespan and stored on app.state; handlers reach
      it through get_db, never through a module-level singleton
    - expire_on_commit=False: prevents lazy-load issues in async context
    - SQLite URLs skip pool sizing: aiosqlite uses a static/queue pool of its own
"""

import asyncio
import logging
import random
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import text

from user_api.core.errors import DatabaseError
from user_api.db.base import Base

logger = logging.getLogger(__name__)


def map_db_error(e: SQLAlchemyError | OSError) -> DatabaseError:
    """Translate a SQLAlchemy or driver connection error into DatabaseError.

    asyncpg raises ConnectionRefusedError and TimeoutError unwrapped when the
    pool opens a fresh connection, so OSError lands here too.
    """
    if isinstance(e, OSError):
        return DatabaseError("Database connection unavailable", "connect")
    if isinstance(e, IntegrityError):
        return DatabaseError("Integrity constraint violated", "commit")
    if isinstance(e, OperationalError):
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(e, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ) -> "DatabaseSessionManager":
        if database_url.startswith("sqlite"):
            engine = create_async_engine(database_url)
        else:
            engine = create_async_engine(
                database_url,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,
                pool_recycle=3600,
            )
        return cls(engine)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except (SQLAlchemyError, OSError) as e:
            await session.rollback()
            logger.error(f"DB error ({type(e).__name__}): {e}")
            raise map_db_error(e)
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Open a connection and create missing tables. Raises if unreachable."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _backoff_delay_ms(attempt: int, base_delay_ms: int, max_delay_ms: int) -> float:
    """Exponential backoff with ±25% jitter, capped at max_delay_ms."""
    delay = min(base_delay_ms * (2 ** attempt), max_delay_ms)
    return delay * random.uniform(0.75, 1.25)


async def connect_with_retry(
    manager: DatabaseSessionManager,
    attempts: int = 5,
    base_delay_ms: int = 500,
    max_delay_ms: int = 10_000,
) -> None:
    """Connect and ensure the schema exists, retrying transient failures.

    Raises DatabaseError once all attempts are exhausted, so the caller
    (the lifespan) aborts startup instead of serving in a broken state.
    """
    for attempt in range(attempts):
        try:
            await manager.create_schema()
            logger.info("Connected to database", extra={"attempt": attempt + 1})
            return
        except (SQLAlchemyError, OSError) as e:
            if attempt == attempts - 1:
                logger.error(
                    f"Database unreachable after {attempts} attempts: {e}",
                    extra={"attempt": attempt + 1},
                )
                raise DatabaseError(
                    "Database unreachable at startup", "connect",
                ) from e
            delay_ms = _backoff_delay_ms(attempt, base_delay_ms, max_delay_ms)
            logger.warning(
                f"Database connect failed ({e}), retrying in {delay_ms:.0f}ms",
                extra={"attempt": attempt + 1},
            )
            await asyncio.sleep(delay_ms / 1000)


def get_db_manager(request: Request) -> DatabaseSessionManager:
    """FastAPI dependency for the application's session manager."""
    manager = getattr(request.app.state, "db_manager", None)
    if manager is None:
        raise RuntimeError("Database not initialized")
    return manager


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with get_db_manager(request).session() as session:
        yield session
