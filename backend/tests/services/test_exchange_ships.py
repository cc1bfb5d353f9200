"""Ship Exchange — a character owns at most one ship; swaps withdraw first."""

import pytest

from vault.core.domain_types import AssetClass, ExchangeOperation
from vault.core.errors import NotOwnerError, ShipAlreadySetError, TooManyShipsError
from vault.schemas.exchange import ShipExchangeRequest
from vault.services.exchange_runner import run_exchange
from tests.services.seed_world import custody, receipt_count, seed_ship, ship_owner


async def _exchange(db, settings, world, deposit_ids=(), withdrawal_ids=()):
    request = ShipExchangeRequest(
        deposit_ids=list(deposit_ids), withdrawal_ids=list(withdrawal_ids),
    )
    return await run_exchange(db, settings, ExchangeOperation.SHIPS, world.caller, request)


@pytest.mark.asyncio
async def test_deposit_fills_empty_slot(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10)

    await _exchange(test_db, settings, world, deposit_ids=[10])

    assert await ship_owner(test_db, 10) == world.character_id
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 10) == (0, 1)


@pytest.mark.asyncio
async def test_withdraw_empties_slot(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10, owner_id=world.character_id)

    await _exchange(test_db, settings, world, withdrawal_ids=[10])

    assert await ship_owner(test_db, 10) is None
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 10) == (1, 0)


@pytest.mark.asyncio
async def test_swap_replaces_ship(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10, owner_id=world.character_id)
    await seed_ship(test_db, world.account_id, 11)

    await _exchange(test_db, settings, world, deposit_ids=[11], withdrawal_ids=[10])

    assert await ship_owner(test_db, 10) is None
    assert await ship_owner(test_db, 11) == world.character_id
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 10) == (1, 0)
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 11) == (0, 1)


@pytest.mark.asyncio
async def test_two_ships_in_one_direction_rejected(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10)
    await seed_ship(test_db, world.account_id, 11)

    with pytest.raises(TooManyShipsError) as exc:
        await _exchange(test_db, settings, world, deposit_ids=[10, 11])

    assert exc.value.deposit_count == 2
    assert exc.value.withdrawal_count == 0
    assert await ship_owner(test_db, 10) is None
    assert await receipt_count(test_db) == 0


@pytest.mark.asyncio
async def test_deposit_into_occupied_slot_rolls_back(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10, owner_id=world.character_id)
    await seed_ship(test_db, world.account_id, 11)

    with pytest.raises(ShipAlreadySetError):
        await _exchange(test_db, settings, world, deposit_ids=[11])

    assert await ship_owner(test_db, 10) == world.character_id
    assert await ship_owner(test_db, 11) is None
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 11) == (1, 0)


@pytest.mark.asyncio
async def test_withdrawing_foreign_ship_rejected(test_db, settings, world):
    await seed_ship(
        test_db, world.other_account_id, 12, owner_id=world.other_character_id,
    )

    with pytest.raises(NotOwnerError):
        await _exchange(test_db, settings, world, withdrawal_ids=[12])

    assert await ship_owner(test_db, 12) == world.other_character_id


@pytest.mark.asyncio
async def test_deposit_then_withdraw_restores_state(test_db, settings, world):
    await seed_ship(test_db, world.account_id, 10)

    await _exchange(test_db, settings, world, deposit_ids=[10])
    await _exchange(test_db, settings, world, withdrawal_ids=[10])

    assert await ship_owner(test_db, 10) is None
    assert await custody(test_db, world.account_id, AssetClass.SHIP, 10) == (1, 0)
    assert await receipt_count(test_db) == 2
