"""Database Session Manager — one async engine per process, one session per request.

Invariants:
    - Every request session rolls back on a SQLAlchemy exception before it surfaces
    - Store failures surface as DatabaseError (core/errors.py), never raw driver errors
    - The engine is created once at startup (init_db) and disposed once at shutdown (close_db)
    - Pool sizing only applies to pooled backends; SQLite (tests, local) keeps its default pool

Design Decisions:
    - Singleton db_manager initialized from the FastAPI lifespan, not at import time
    - expire_on_commit=False: services return ORM rows after commit for serialization
    - Services that handle their own failures (payment retry, best-effort notifications)
      catch before this layer sees anything
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from etuition.core.errors import DatabaseError

logger = logging.getLogger(__name__)

# (exception type, operation, client-safe message), most specific first
_FAILURE_MODES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "commit", "Record conflicts with an existing one"),
    (OperationalError, "execute", "Store temporarily unavailable"),
    (DBAPIError, "query", "Store rejected the query"),
    (SQLAlchemyError, "unknown", "Store operation failed"),
)


def classify_failure(error: SQLAlchemyError) -> tuple[str, str]:
    """(operation, message) for a store failure."""
    for error_type, operation, message in _FAILURE_MODES:
        if isinstance(error, error_type):
            return operation, message
    return "unknown", "Store operation failed"


class DatabaseSessionManager:
    """Owns the engine and hands out request-scoped sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            operation, message = classify_failure(e)
            logger.error(
                f"Store {operation} failed: {type(e).__name__}: {e}",
                extra={"error_code": "DATABASE_ERROR"},
            )
            raise DatabaseError(message, operation)
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """SELECT 1 through a fresh session (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except (DatabaseError, OSError) as e:
            logger.error(f"Store health check failed: {e}")
            return False

    async def close(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.close()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
