"""Settings — environment-driven configuration."""

import pytest
from pydantic import ValidationError

from vault.config import Settings
from vault.core.domain_types import WorldState


def test_postgres_url_coerced_to_asyncpg():
    settings = Settings(DATABASE_URL="postgresql://u:p@host:5432/vault")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/vault"


def test_exchange_defaults():
    settings = Settings()
    assert settings.belt_capacity == 4
    assert settings.open_world_state == WorldState.OPEN_WORLD
    assert settings.caller_header == "X-Vault-Caller"


def test_belt_capacity_read_from_prefixed_env(monkeypatch):
    monkeypatch.setenv("VAULT_BELT_CAPACITY", "6")
    assert Settings().belt_capacity == 6


def test_belt_capacity_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(belt_capacity=0)
