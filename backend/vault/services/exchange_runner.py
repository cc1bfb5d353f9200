"""Exchange Runner — the transaction boundary around every coordinator call.

Invariants:
    - One unit of work per exchange: commit on success, rollback on any failure
    - The coordinator is rebuilt per call over collaborators bound to the same session
    - A receipt row is written inside the unit of work (aborted exchanges leave none)
    - Every run logs exactly one outcome line with operation/account/character

Design Decisions:
    - Explicit dict from ExchangeOperation to handler: every mapping visible in one place
    - Errors are logged here and re-raised untouched: the API layer maps them to JSON
"""

import logging
from typing import Awaitable, Callable

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from vault.config import Settings
from vault.core.domain_types import CallerId, ExchangeOperation
from vault.core.errors import VaultError
from vault.infrastructure.asset_registries import SqlAmuletRegistry, SqlShipRegistry
from vault.infrastructure.custodial_ledger import SqlCustodialLedger
from vault.infrastructure.database import unit_of_work
from vault.infrastructure.observability import error_extra
from vault.infrastructure.record_stores import (
    SqlBeltStore, SqlCurrencyStore, SqlInventoryStore, SqlItemStore, SqlShipSlotStore,
)
from vault.infrastructure.session_gate import SqlSessionGate
from vault.models.exchange_receipt import ExchangeReceipt
from vault.services.exchange_coordinator import ExchangeContext, ExchangeCoordinator

logger = logging.getLogger(__name__)

Handler = Callable[[ExchangeCoordinator, CallerId, BaseModel], Awaitable[ExchangeContext]]


def build_coordinator(db: AsyncSession, settings: Settings) -> ExchangeCoordinator:
    """Wire the coordinator to SQL collaborators sharing one session."""
    return ExchangeCoordinator(
        gate=SqlSessionGate(db),
        ledger=SqlCustodialLedger(db),
        amulets=SqlAmuletRegistry(db),
        ships=SqlShipRegistry(db),
        ship_slots=SqlShipSlotStore(db),
        inventory=SqlInventoryStore(db),
        belt=SqlBeltStore(db, settings.belt_capacity),
        items=SqlItemStore(db),
        currencies=SqlCurrencyStore(db),
        open_state=settings.open_world_state,
    )


async def _amulets(c: ExchangeCoordinator, caller: CallerId, r) -> ExchangeContext:
    return await c.exchange_amulets(caller, r.deposit_ids, r.withdrawal_ids)


async def _filled_amulets(c: ExchangeCoordinator, caller: CallerId, r) -> ExchangeContext:
    return await c.exchange_filled_amulets(caller, r.deposit_ids, r.withdrawal_ids)


async def _currencies(c: ExchangeCoordinator, caller: CallerId, r) -> ExchangeContext:
    return await c.exchange_currencies(
        caller,
        deposit_runix=r.deposit_runix,
        withdraw_runix=r.withdraw_runix,
        deposit_onyx=r.deposit_onyx,
        withdraw_onyx=r.withdraw_onyx,
    )


async def _items(c: ExchangeCoordinator, caller: CallerId, r) -> ExchangeContext:
    return await c.exchange_items(
        caller,
        r.deposit_ids, r.deposit_quantities,
        r.withdrawal_ids, r.withdrawal_quantities,
    )


async def _ships(c: ExchangeCoordinator, caller: CallerId, r) -> ExchangeContext:
    return await c.exchange_ships(caller, r.deposit_ids, r.withdrawal_ids)


# Adding an operation requires editing this dict
HANDLERS: dict[ExchangeOperation, Handler] = {
    ExchangeOperation.AMULETS: _amulets,
    ExchangeOperation.FILLED_AMULETS: _filled_amulets,
    ExchangeOperation.CURRENCIES: _currencies,
    ExchangeOperation.ITEMS: _items,
    ExchangeOperation.SHIPS: _ships,
}


async def run_exchange(
    db: AsyncSession,
    settings: Settings,
    operation: ExchangeOperation,
    caller: CallerId,
    request: BaseModel,
) -> dict:
    """Run one exchange atomically and return its receipt summary."""
    handler = HANDLERS[operation]
    try:
        async with unit_of_work(db):
            ctx = await handler(build_coordinator(db, settings), caller, request)
            receipt = ExchangeReceipt(
                account_id=ctx.account_id,
                character_id=ctx.character_id,
                operation=operation.value,
                request=request.model_dump(mode="json"),
            )
            db.add(receipt)
    except VaultError as e:
        e.context.operation = operation.value
        logger.warning(
            f"Exchange {operation.value} aborted: {e.message}", extra=error_extra(e),
        )
        raise

    logger.info(
        f"Exchange {operation.value} committed",
        extra={
            "operation": operation.value,
            "account_id": ctx.account_id,
            "character_id": ctx.character_id,
            "receipt_id": str(receipt.id),
        },
    )
    return {
        "status": "ok",
        "receipt_id": str(receipt.id),
        "operation": operation.value,
        "account_id": ctx.account_id,
        "character_id": ctx.character_id,
    }
