"""Exchange Routes — one POST endpoint per asset class.

Invariants:
    - The caller is identified by the configured header (default X-Vault-Caller)
    - Request bodies validated by Pydantic before any transaction is opened
    - Every endpoint delegates to run_exchange: one unit of work per request
    - Failures surface as the specific VaultError code (global handler), never generic

Design Decisions:
    - get_caller exported for reuse by the accounts routes
    - A missing caller header is an unlinked caller, not a validation error
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vault.config import Settings, get_settings
from vault.core.domain_types import CallerId, ExchangeOperation
from vault.core.errors import UnlinkedAccountError
from vault.infrastructure.database import get_db
from vault.schemas.exchange import (
    AmuletExchangeRequest,
    CurrencyExchangeRequest,
    ExchangeResponse,
    ItemExchangeRequest,
    ShipExchangeRequest,
)
from vault.services.exchange_runner import run_exchange

router = APIRouter(prefix="/api/v1/exchange", tags=["exchange"])


def get_caller(
    request: Request, settings: Settings = Depends(get_settings),
) -> CallerId:
    """Read the caller identity from the configured header."""
    caller = request.headers.get(settings.caller_header, "").strip()
    if not caller:
        raise UnlinkedAccountError("", f"missing {settings.caller_header} header")
    return CallerId(caller)


@router.post("/amulets", response_model=ExchangeResponse)
async def exchange_amulets(
    body: AmuletExchangeRequest,
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Move empty amulets between custody and the inventory."""
    return await run_exchange(db, settings, ExchangeOperation.AMULETS, caller, body)


@router.post("/filled-amulets", response_model=ExchangeResponse)
async def exchange_filled_amulets(
    body: AmuletExchangeRequest,
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Move filled amulets between custody and the belt."""
    return await run_exchange(
        db, settings, ExchangeOperation.FILLED_AMULETS, caller, body,
    )


@router.post("/currencies", response_model=ExchangeResponse)
async def exchange_currencies(
    body: CurrencyExchangeRequest,
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Deposit / withdraw Runix and Onyx."""
    return await run_exchange(db, settings, ExchangeOperation.CURRENCIES, caller, body)


@router.post("/items", response_model=ExchangeResponse)
async def exchange_items(
    body: ItemExchangeRequest,
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Deposit / withdraw item stacks."""
    return await run_exchange(db, settings, ExchangeOperation.ITEMS, caller, body)


@router.post("/ships", response_model=ExchangeResponse)
async def exchange_ships(
    body: ShipExchangeRequest,
    caller: CallerId = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Deposit and/or withdraw a single ship (a swap when both are given)."""
    return await run_exchange(db, settings, ExchangeOperation.SHIPS, caller, body)
