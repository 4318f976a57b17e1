"""Database Session Manager: async engine, per-request sessions, startup probe.

Invariants:
    - Every session rolls back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - wait_until_ready is the only retry loop in the process and runs once at startup
    - wait_until_ready raises DatabaseUnavailableError once the timeout elapses

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: ORM rows stay readable after commit in async context
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from products_crud.core.errors import DatabaseUnavailableError

logger = logging.getLogger(__name__)

PING_INTERVAL_SECONDS: float = 2.0


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 10, max_overflow: int = 5,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning(f"DB health check failed: {e}")
            return False

    async def wait_until_ready(
        self,
        timeout_seconds: float,
        interval_seconds: float = PING_INTERVAL_SECONDS,
    ) -> None:
        """Ping every `interval_seconds` until the database answers.

        Raises DatabaseUnavailableError when `timeout_seconds` elapse first.
        """
        deadline = time.monotonic() + timeout_seconds
        attempt = 0
        while True:
            await asyncio.sleep(interval_seconds)
            if time.monotonic() > deadline:
                raise DatabaseUnavailableError(timeout_seconds)
            attempt += 1
            if await self.health_check():
                logger.info("Database online", extra={"attempt": attempt})
                return
            logger.warning(
                "could not ping the database", extra={"attempt": attempt},
            )

    async def close(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
