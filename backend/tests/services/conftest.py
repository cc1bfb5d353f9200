"""Service test fixtures — async DB, seeded world, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_settings dependencies overridden for route tests
    - db_manager patched so readiness probes see the test engine
    - `world` seeds two linked accounts, each with one open-world character

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, so rollback in
      the unit of work is observable from the test's own session
    - Assertions read columns through select() rather than touching seeded ORM
      instances, which are expired after a rollback
"""

import pytest
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from vault.config import Settings, get_settings
from vault.core.domain_types import WorldState
from vault.db.base import Base
from vault.db.session import create_session_factory
from vault.infrastructure.database import get_db, DatabaseSessionManager
import vault.infrastructure.database as db_module
import vault.models  # noqa: F401
from vault.models.account import Account
from vault.models.account_link import AccountLink
from vault.models.character import Character
from vault.main import app
from tests.services.seed_world import BELT_CAPACITY, World


@pytest.fixture
def settings() -> Settings:
    return Settings(belt_capacity=BELT_CAPACITY, log_format="text")


@pytest.fixture
async def test_session_factory():
    factory = create_session_factory(
        "sqlite+aiosqlite:///:memory:", poolclass=StaticPool,
    )
    engine = factory.kw["bind"]
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory, settings):
    """FastAPI test client with DB and settings dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: settings

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_session_factory.kw["bind"]
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seeded world ────────────────────────────────────────────────

@pytest.fixture
async def world(test_db) -> World:
    w = World()
    test_db.add_all([
        Account(id=w.account_id, selected_character_id=w.character_id),
        Account(id=w.other_account_id, selected_character_id=w.other_character_id),
    ])
    await test_db.flush()
    test_db.add_all([
        AccountLink(caller=w.caller, account_id=w.account_id, active=True),
        AccountLink(caller=w.other_caller, account_id=w.other_account_id, active=True),
        Character(id=w.character_id, account_id=w.account_id, name="Ayla",
                  world_state=WorldState.OPEN_WORLD.value),
        Character(id=w.other_character_id, account_id=w.other_account_id, name="Brann",
                  world_state=WorldState.OPEN_WORLD.value),
    ])
    await test_db.commit()
    return w


