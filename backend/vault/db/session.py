"""Async Session Factory — provides async DB sessions outside FastAPI.

Invariants:
    - Meant for scripts, migrations and test fixtures
    - expire_on_commit=False: objects stay readable after a unit of work commits

Design Decisions:
    - Separate from infrastructure/database.py: non-request contexts need a raw
      session factory without the pooled manager
"""

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker


def create_session_factory(
    database_url: str, **engine_kwargs,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given database URL."""
    engine = create_async_engine(database_url, echo=False, **engine_kwargs)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )
