"""Account Routes — read-only holdings and custody views for the calling account.

Invariants:
    - GET only; nothing here opens a unit of work
    - Unlinked callers get UNLINKED_ACCOUNT, same as on exchange endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vault.api.routes.exchange import get_caller
from vault.config import Settings, get_settings
from vault.core.domain_types import CallerId
from vault.infrastructure.database import get_db
from vault.services.holdings_query import character_holdings, custody_lines

router = APIRouter(prefix="/api/v1/accounts", tags=["accounts"])


@router.get("/me/holdings")
async def get_holdings(
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Inventory, belt, ship slot, item stacks and balances of the selected character."""
    holdings = await character_holdings(db, settings, caller)
    return holdings.to_dict()


@router.get("/me/custody")
async def get_custody(
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Wallet and escrowed quantities the custodial ledger holds for the account."""
    account_id, lines = await custody_lines(db, caller)
    return {
        "account_id": account_id,
        "holdings": [line.to_dict() for line in lines],
    }
