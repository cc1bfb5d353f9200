"""Amulet Exchange — empty amulets between custody and the inventory, against SQLite.

Invariants:
    - A committed exchange moves ownership, inventory membership and custody together
    - Any failing leg rolls back every earlier leg of the same call
    - Aborted exchanges leave no receipt
"""

import pytest
from sqlalchemy import update

from vault.core.domain_types import AssetClass, ExchangeOperation, WorldState
from vault.core.errors import (
    AmuletNotEmptyError,
    AssetNotHeldError,
    InsufficientWalletError,
    InvalidWorldStateError,
    NotOwnerError,
    ResourceNotFoundError,
    SoulboundAmuletError,
)
from vault.models.amulet import Amulet
from vault.models.character import Character
from vault.schemas.exchange import AmuletExchangeRequest
from vault.services.exchange_runner import run_exchange
from tests.services.seed_world import (
    amulet_owner,
    custody,
    inventory_ids,
    receipt_count,
    seed_amulet_in_inventory,
    seed_amulet_in_wallet,
    seed_custody,
)


async def _exchange(db, settings, world, deposit_ids=(), withdrawal_ids=()):
    request = AmuletExchangeRequest(
        deposit_ids=list(deposit_ids), withdrawal_ids=list(withdrawal_ids),
    )
    return await run_exchange(
        db, settings, ExchangeOperation.AMULETS, world.caller, request,
    )


@pytest.mark.asyncio
async def test_deposit_moves_amulet_into_inventory(test_db, settings, world):
    await seed_amulet_in_wallet(test_db, world.account_id, 4)

    result = await _exchange(test_db, settings, world, deposit_ids=[4])

    assert result["status"] == "ok"
    assert result["character_id"] == world.character_id
    assert await amulet_owner(test_db, 4) == world.character_id
    assert await inventory_ids(test_db, world.character_id) == [4]
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 4) == (0, 1)
    assert await receipt_count(test_db) == 1


@pytest.mark.asyncio
async def test_withdrawal_releases_amulet_to_wallet(test_db, settings, world):
    await seed_amulet_in_inventory(test_db, world.account_id, world.character_id, 3)

    await _exchange(test_db, settings, world, withdrawal_ids=[3])

    assert await amulet_owner(test_db, 3) is None
    assert await inventory_ids(test_db, world.character_id) == []
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 3) == (1, 0)


@pytest.mark.asyncio
async def test_deposit_then_withdraw_restores_state(test_db, settings, world):
    await seed_amulet_in_wallet(test_db, world.account_id, 4)

    await _exchange(test_db, settings, world, deposit_ids=[4])
    await _exchange(test_db, settings, world, withdrawal_ids=[4])

    assert await amulet_owner(test_db, 4) is None
    assert await inventory_ids(test_db, world.character_id) == []
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 4) == (1, 0)


@pytest.mark.asyncio
async def test_soulbound_amulet_cannot_be_withdrawn(test_db, settings, world):
    await seed_amulet_in_inventory(
        test_db, world.account_id, world.character_id, 7, soulbound=True,
    )

    with pytest.raises(SoulboundAmuletError) as exc:
        await _exchange(test_db, settings, world, withdrawal_ids=[7])

    assert exc.value.details == {"amulet_id": 7}
    assert exc.value.context.operation == "exchange_amulets"
    assert await amulet_owner(test_db, 7) == world.character_id
    assert await inventory_ids(test_db, world.character_id) == [7]
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 7) == (0, 1)
    assert await receipt_count(test_db) == 0


@pytest.mark.asyncio
async def test_amulet_of_other_character_rejected(test_db, settings, world):
    await seed_amulet_in_inventory(
        test_db, world.other_account_id, world.other_character_id, 8,
    )

    with pytest.raises(NotOwnerError):
        await _exchange(test_db, settings, world, withdrawal_ids=[8])

    assert await amulet_owner(test_db, 8) == world.other_character_id


@pytest.mark.asyncio
async def test_filled_amulet_rejected_by_inventory_channel(test_db, settings, world):
    await seed_amulet_in_wallet(test_db, world.account_id, 5, payload=42)

    with pytest.raises(AmuletNotEmptyError):
        await _exchange(test_db, settings, world, deposit_ids=[5])

    assert await amulet_owner(test_db, 5) is None
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 5) == (1, 0)


@pytest.mark.asyncio
async def test_failed_deposit_rolls_back_earlier_withdrawal(test_db, settings, world):
    await seed_amulet_in_inventory(test_db, world.account_id, world.character_id, 3)
    await seed_amulet_in_wallet(test_db, world.account_id, 5, payload=42)

    with pytest.raises(AmuletNotEmptyError):
        await _exchange(test_db, settings, world, deposit_ids=[5], withdrawal_ids=[3])

    assert await amulet_owner(test_db, 3) == world.character_id
    assert await inventory_ids(test_db, world.character_id) == [3]
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 3) == (0, 1)
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 5) == (1, 0)
    assert await receipt_count(test_db) == 0


@pytest.mark.asyncio
async def test_deposit_without_wallet_holding_rejected(test_db, settings, world):
    await seed_amulet_in_inventory(
        test_db, world.other_account_id, world.other_character_id, 6,
    )

    with pytest.raises(InsufficientWalletError):
        await _exchange(test_db, settings, world, deposit_ids=[6])

    assert await amulet_owner(test_db, 6) == world.other_character_id


@pytest.mark.asyncio
async def test_unknown_amulet_is_not_found(test_db, settings, world):
    with pytest.raises(ResourceNotFoundError):
        await _exchange(test_db, settings, world, withdrawal_ids=[999])


@pytest.mark.asyncio
async def test_character_in_combat_cannot_exchange(test_db, settings, world):
    await seed_amulet_in_wallet(test_db, world.account_id, 4)
    await test_db.execute(
        update(Character)
        .where(Character.id == world.character_id)
        .values(world_state=WorldState.COMBAT.value),
    )
    await test_db.commit()

    with pytest.raises(InvalidWorldStateError):
        await _exchange(test_db, settings, world, deposit_ids=[4])

    assert await amulet_owner(test_db, 4) is None
    assert await receipt_count(test_db) == 0


@pytest.mark.asyncio
async def test_empty_request_commits_receipt_only(test_db, settings, world):
    await _exchange(test_db, settings, world)
    assert await receipt_count(test_db) == 1


@pytest.mark.asyncio
async def test_owned_amulet_missing_from_inventory_not_held(test_db, settings, world):
    test_db.add(Amulet(id=6, owner_id=world.character_id, soulbound=False, payload=None))
    await test_db.commit()
    await seed_custody(test_db, world.account_id, AssetClass.AMULET, 6, escrowed=1)

    with pytest.raises(AssetNotHeldError) as exc:
        await _exchange(test_db, settings, world, withdrawal_ids=[6])

    assert exc.value.details["container"] == "inventory"
    assert await amulet_owner(test_db, 6) == world.character_id
    assert await custody(test_db, world.account_id, AssetClass.AMULET, 6) == (0, 1)
    assert await receipt_count(test_db) == 0
