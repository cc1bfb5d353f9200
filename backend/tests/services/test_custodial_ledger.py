"""Custodial Ledger — wallet/escrow movements per asset class."""

import pytest

from vault.core.domain_types import AssetClass, Currency
from vault.core.errors import InsufficientCustodyError, InsufficientWalletError
from vault.infrastructure.custodial_ledger import SqlCustodialLedger
from tests.services.seed_world import custody, seed_custody


@pytest.mark.asyncio
async def test_deposit_moves_wallet_to_escrow(test_db, world):
    await seed_custody(test_db, world.account_id, AssetClass.CURRENCY, "runix", wallet=100)

    await SqlCustodialLedger(test_db).deposit_currency(world.account_id, Currency.RUNIX, 60)

    assert await custody(test_db, world.account_id, AssetClass.CURRENCY, "runix") == (40, 60)


@pytest.mark.asyncio
async def test_withdraw_moves_escrow_to_wallet(test_db, world):
    await seed_custody(test_db, world.account_id, AssetClass.ITEM, 500, escrowed=5)

    await SqlCustodialLedger(test_db).withdraw_item(world.account_id, 500, 5)

    assert await custody(test_db, world.account_id, AssetClass.ITEM, 500) == (5, 0)


@pytest.mark.asyncio
async def test_withdraw_of_untouched_asset_fails(test_db, world):
    with pytest.raises(InsufficientCustodyError) as exc:
        await SqlCustodialLedger(test_db).withdraw_currency(
            world.account_id, Currency.ONYX, 1,
        )
    assert exc.value.details["available"] == 0
    assert exc.value.details["asset_key"] == "onyx"


@pytest.mark.asyncio
async def test_deposit_beyond_wallet_fails(test_db, world):
    await seed_custody(test_db, world.account_id, AssetClass.SHIP, 10, wallet=1)
    ledger = SqlCustodialLedger(test_db)
    await ledger.deposit_ship(world.account_id, 10)

    with pytest.raises(InsufficientWalletError):
        await ledger.deposit_ship(world.account_id, 10)


@pytest.mark.asyncio
async def test_holdings_are_scoped_to_account(test_db, world):
    await seed_custody(test_db, world.account_id, AssetClass.AMULET, 3, escrowed=1)
    await seed_custody(test_db, world.other_account_id, AssetClass.AMULET, 4, wallet=1)

    rows = await SqlCustodialLedger(test_db).holdings(world.account_id)

    assert [(r.asset_class, r.asset_key) for r in rows] == [("amulet", "3")]
