"""Database Session Manager — async connection pool, unit of work and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - unit_of_work commits only on clean exit; ANY exception rolls the whole unit back
      and propagates (domain errors unchanged, SQLAlchemy errors as DatabaseError)
    - Connection pool uses pool_pre_ping for stale connection detection

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: prevents lazy-load issues in async context
    - The exchange transaction is explicit (unit_of_work), not implied by the request
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)
from sqlalchemy import select, text

from vault.core.errors import DatabaseError
from vault.models.custody_holding import CustodyHolding

logger = logging.getLogger(__name__)


def _map_sqlalchemy_error(e: SQLAlchemyError) -> DatabaseError:
    if isinstance(e, IntegrityError):
        logger.error(f"DB integrity error: {e}")
        return DatabaseError("Integrity constraint violated", "commit")
    if isinstance(e, OperationalError):
        logger.error(f"DB operational error: {e}")
        return DatabaseError("Connection or operational error", "execute")
    if isinstance(e, DBAPIError):
        logger.error(f"DB driver error: {e}")
        return DatabaseError("Database driver error", "query")
    logger.error(f"SQLAlchemy error: {e}")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
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
        except SQLAlchemyError as e:
            await session.rollback()
            raise _map_sqlalchemy_error(e) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def schema_ready(self) -> bool:
        """True once the exchange tables exist (migrations applied)."""
        try:
            async with self.session() as db:
                await db.execute(select(CustodyHolding.account_id).limit(1))
            return True
        except Exception as e:
            logger.error(f"DB schema check failed: {e}")
            return False


@asynccontextmanager
async def unit_of_work(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """All-or-nothing boundary for one exchange.

    Flushes and commits on clean exit. On any exception every mutation issued
    through `db` since the last commit is rolled back before the error propagates.
    """
    try:
        yield db
        await db.flush()
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise _map_sqlalchemy_error(e) from e
    except BaseException:
        await db.rollback()
        raise


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs):
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
