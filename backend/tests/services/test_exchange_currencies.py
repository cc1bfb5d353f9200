"""Currency Exchange — Runix/Onyx between custody and character balances."""

import pytest

from vault.core.domain_types import AssetClass, Currency, ExchangeOperation
from vault.core.errors import InsufficientBalanceError, InsufficientCustodyError
from vault.schemas.exchange import CurrencyExchangeRequest
from vault.services.exchange_runner import run_exchange
from tests.services.seed_world import balance, custody, receipt_count, seed_balance, seed_custody


async def _exchange(db, settings, world, **amounts):
    return await run_exchange(
        db, settings, ExchangeOperation.CURRENCIES, world.caller,
        CurrencyExchangeRequest(**amounts),
    )


@pytest.mark.asyncio
async def test_runix_deposit_credits_character(test_db, settings, world):
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "runix", wallet=100)

    await _exchange(test_db, settings, world, deposit_runix=100)

    assert await balance(test_db, world.character_id, Currency.RUNIX) == 100
    assert await balance(test_db, world.character_id, Currency.ONYX) == 0
    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "runix") == (0, 100)
    assert await receipt_count(test_db) == 1


@pytest.mark.asyncio
async def test_withdraw_beyond_custody_rejected(test_db, settings, world):
    await seed_balance(test_db, world.character_id, Currency.ONYX, 10)
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "onyx", escrowed=10)

    with pytest.raises(InsufficientCustodyError) as exc:
        await _exchange(test_db, settings, world, withdraw_onyx=11)

    assert exc.value.details["requested"] == 11
    assert exc.value.details["available"] == 10
    assert await balance(test_db, world.character_id, Currency.ONYX) == 10


@pytest.mark.asyncio
async def test_withdraw_beyond_balance_rolls_back_ledger(test_db, settings, world):
    await seed_balance(test_db, world.character_id, Currency.RUNIX, 5)
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "runix", escrowed=50)

    with pytest.raises(InsufficientBalanceError):
        await _exchange(test_db, settings, world, withdraw_runix=20)

    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "runix") == (0, 50)
    assert await balance(test_db, world.character_id, Currency.RUNIX) == 5


@pytest.mark.asyncio
async def test_deposit_funds_a_same_call_withdrawal(test_db, settings, world):
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "runix", wallet=30)

    await _exchange(test_db, settings, world, deposit_runix=30, withdraw_runix=30)

    assert await balance(test_db, world.character_id, Currency.RUNIX) == 0
    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "runix") == (30, 0)


@pytest.mark.asyncio
async def test_failed_onyx_withdrawal_rolls_back_runix_deposit(test_db, settings, world):
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "runix", wallet=40)

    with pytest.raises(InsufficientCustodyError):
        await _exchange(test_db, settings, world, deposit_runix=40, withdraw_onyx=1)

    assert await balance(test_db, world.character_id, Currency.RUNIX) == 0
    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "runix") == (40, 0)
    assert await receipt_count(test_db) == 0


@pytest.mark.asyncio
async def test_deposit_then_withdraw_restores_state(test_db, settings, world):
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "onyx", wallet=25)

    await _exchange(test_db, settings, world, deposit_onyx=25)
    await _exchange(test_db, settings, world, withdraw_onyx=25)

    assert await balance(test_db, world.character_id, Currency.ONYX) == 0
    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "onyx") == (25, 0)
    assert await receipt_count(test_db) == 2
