"""Holdings Query — read-only views of a caller's character and custody.

Invariants:
    - Never mutates: no unit of work, nothing to commit
    - Caller resolution goes through the same SessionGate as exchanges, but
      without the world-state check (reading is allowed in any state)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from vault.config import Settings
from vault.core.domain_types import CallerId, Currency
from vault.core.errors import ResourceNotFoundError
from vault.core.holdings import CharacterHoldings, CustodyLine
from vault.infrastructure.custodial_ledger import SqlCustodialLedger
from vault.infrastructure.record_stores import (
    SqlBeltStore, SqlCurrencyStore, SqlInventoryStore, SqlItemStore, SqlShipSlotStore,
)
from vault.infrastructure.session_gate import SqlSessionGate
from vault.models.character import Character


async def character_holdings(
    db: AsyncSession, settings: Settings, caller: CallerId,
) -> CharacterHoldings:
    gate = SqlSessionGate(db)
    account_id = await gate.resolve_active_account(caller)
    character_id = await gate.selected_character(account_id)
    character = await db.get(Character, character_id)
    if not character:
        raise ResourceNotFoundError("Character", str(character_id))

    currencies = SqlCurrencyStore(db)
    return CharacterHoldings(
        account_id=account_id,
        character_id=character_id,
        world_state=character.world_state,
        ship_id=await SqlShipSlotStore(db).ship_of(character_id),
        inventory_amulet_ids=list(await SqlInventoryStore(db).amulet_ids(character_id)),
        belt_amulet_ids=list(
            await SqlBeltStore(db, settings.belt_capacity).amulet_ids(character_id),
        ),
        belt_capacity=settings.belt_capacity,
        items=await SqlItemStore(db).stacks(character_id),
        balances={c: await currencies.balance(character_id, c) for c in Currency},
    )


async def custody_lines(db: AsyncSession, caller: CallerId) -> tuple[str, list[CustodyLine]]:
    account_id = await SqlSessionGate(db).resolve_active_account(caller)
    rows = await SqlCustodialLedger(db).holdings(account_id)
    return account_id, [
        CustodyLine(
            asset_class=row.asset_class, asset_key=row.asset_key,
            wallet=row.wallet, escrowed=row.escrowed,
        )
        for row in rows
    ]
