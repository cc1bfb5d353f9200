"""SQL Custodial Ledger — escrows assets for an account while they live in-game.

Invariants:
    - deposit moves `quantity` from wallet to escrow; fails with InsufficientWalletError
      if the wallet holds less
    - withdraw moves `quantity` from escrow back to the wallet; fails with
      InsufficientCustodyError if escrow holds less, the non-negativity gate for
      currency withdrawals
    - Zero-quantity movements never reach the ledger (the coordinator skips them)
    - Amulets and ships move as single units (quantity 1)

Design Decisions:
    - Same database as the character records: ledger legs join the exchange's unit
      of work and roll back with it, so no compensating calls are needed
    - Rows are created lazily on first touch (escrow of a never-seen asset is 0)
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vault.core.domain_types import (
    AccountId, AmuletId, AssetClass, Currency, ItemId, ShipId,
)
from vault.core.errors import InsufficientCustodyError, InsufficientWalletError
from vault.models.custody_holding import CustodyHolding

logger = logging.getLogger(__name__)


class SqlCustodialLedger:
    """CustodialLedger backed by the custody_holdings table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _holding(
        self, account: AccountId, asset_class: AssetClass, asset_key: str,
    ) -> CustodyHolding:
        result = await self.db.execute(
            select(CustodyHolding)
            .where(CustodyHolding.account_id == account)
            .where(CustodyHolding.asset_class == asset_class.value)
            .where(CustodyHolding.asset_key == asset_key),
        )
        holding = result.scalar_one_or_none()
        if not holding:
            holding = CustodyHolding(
                account_id=account, asset_class=asset_class.value,
                asset_key=asset_key, wallet=0, escrowed=0,
            )
            self.db.add(holding)
        return holding

    async def _deposit(
        self, account: AccountId, asset_class: AssetClass, asset_key: str, quantity: int,
    ) -> None:
        holding = await self._holding(account, asset_class, asset_key)
        if holding.wallet < quantity:
            raise InsufficientWalletError(
                account, asset_class.value, asset_key, quantity, holding.wallet,
            )
        holding.wallet -= quantity
        holding.escrowed += quantity
        await self.db.flush()
        logger.debug(
            f"Escrowed {quantity} x {asset_class.value} '{asset_key}'",
            extra={"account_id": account},
        )

    async def _withdraw(
        self, account: AccountId, asset_class: AssetClass, asset_key: str, quantity: int,
    ) -> None:
        holding = await self._holding(account, asset_class, asset_key)
        if holding.escrowed < quantity:
            raise InsufficientCustodyError(
                account, asset_class.value, asset_key, quantity, holding.escrowed,
            )
        holding.escrowed -= quantity
        holding.wallet += quantity
        await self.db.flush()
        logger.debug(
            f"Released {quantity} x {asset_class.value} '{asset_key}'",
            extra={"account_id": account},
        )

    async def deposit_amulet(self, account: AccountId, amulet_id: AmuletId) -> None:
        await self._deposit(account, AssetClass.AMULET, str(amulet_id), 1)

    async def withdraw_amulet(self, account: AccountId, amulet_id: AmuletId) -> None:
        await self._withdraw(account, AssetClass.AMULET, str(amulet_id), 1)

    async def deposit_ship(self, account: AccountId, ship_id: ShipId) -> None:
        await self._deposit(account, AssetClass.SHIP, str(ship_id), 1)

    async def withdraw_ship(self, account: AccountId, ship_id: ShipId) -> None:
        await self._withdraw(account, AssetClass.SHIP, str(ship_id), 1)

    async def deposit_item(
        self, account: AccountId, item_id: ItemId, quantity: int,
    ) -> None:
        await self._deposit(account, AssetClass.ITEM, str(item_id), quantity)

    async def withdraw_item(
        self, account: AccountId, item_id: ItemId, quantity: int,
    ) -> None:
        await self._withdraw(account, AssetClass.ITEM, str(item_id), quantity)

    async def deposit_currency(
        self, account: AccountId, currency: Currency, amount: int,
    ) -> None:
        await self._deposit(account, AssetClass.CURRENCY, currency.value, amount)

    async def withdraw_currency(
        self, account: AccountId, currency: Currency, amount: int,
    ) -> None:
        await self._withdraw(account, AssetClass.CURRENCY, currency.value, amount)

    async def holdings(self, account: AccountId) -> list[CustodyHolding]:
        """All custody rows for an account, for read-only views."""
        result = await self.db.execute(
            select(CustodyHolding)
            .where(CustodyHolding.account_id == account)
            .order_by(CustodyHolding.asset_class, CustodyHolding.asset_key),
        )
        return list(result.scalars().all())
