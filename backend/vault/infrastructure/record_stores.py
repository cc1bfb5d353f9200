"""SQL Record Stores — inventory, belt, item stacks, currency balances and ship slot.

Invariants:
    - remove/deduct fail (AssetNotHeld / InsufficientItems / InsufficientBalance)
      instead of going below zero or removing something absent
    - add creates the row when absent (stacks and balances start at 0)
    - BeltStore.add never checks capacity: overflow is judged once per exchange
    - ShipSlotStore.set_slot refuses an occupied slot (one ship per character)
"""

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vault.core.domain_types import (
    AmuletContainer, AmuletId, CharacterId, Currency, ItemId, ShipId,
)
from vault.core.enforce_exchange import belt_is_overflowing
from vault.core.errors import (
    AssetNotHeldError,
    InsufficientBalanceError,
    InsufficientItemsError,
    ResourceNotFoundError,
    ShipAlreadySetError,
)
from vault.models.belt_slot import BeltSlot
from vault.models.currency_balance import CurrencyBalance
from vault.models.inventory_amulet import InventoryAmulet
from vault.models.item_stack import ItemStack
from vault.models.ship import Ship


class SqlInventoryStore:
    """InventoryStore backed by inventory_amulets."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, character_id: CharacterId, amulet_id: AmuletId) -> None:
        self.db.add(InventoryAmulet(character_id=character_id, amulet_id=amulet_id))
        await self.db.flush()

    async def remove(self, character_id: CharacterId, amulet_id: AmuletId) -> None:
        result = await self.db.execute(
            delete(InventoryAmulet)
            .where(InventoryAmulet.character_id == character_id)
            .where(InventoryAmulet.amulet_id == amulet_id),
        )
        if result.rowcount == 0:
            raise AssetNotHeldError(
                character_id, AmuletContainer.INVENTORY.value, amulet_id,
            )

    async def amulet_ids(self, character_id: CharacterId) -> Sequence[AmuletId]:
        result = await self.db.execute(
            select(InventoryAmulet.amulet_id)
            .where(InventoryAmulet.character_id == character_id)
            .order_by(InventoryAmulet.amulet_id),
        )
        return [AmuletId(a) for a in result.scalars().all()]


class SqlBeltStore:
    """BeltStore backed by belt_slots; every belt shares one fixed capacity."""

    def __init__(self, db: AsyncSession, capacity: int):
        self.db = db
        self.capacity = capacity

    async def add(self, character_id: CharacterId, amulet_id: AmuletId) -> None:
        result = await self.db.execute(
            select(func.max(BeltSlot.position))
            .where(BeltSlot.character_id == character_id),
        )
        last = result.scalar_one_or_none()
        position = 0 if last is None else last + 1
        self.db.add(BeltSlot(
            character_id=character_id, amulet_id=amulet_id, position=position,
        ))
        await self.db.flush()

    async def remove(self, character_id: CharacterId, amulet_id: AmuletId) -> None:
        result = await self.db.execute(
            delete(BeltSlot)
            .where(BeltSlot.character_id == character_id)
            .where(BeltSlot.amulet_id == amulet_id),
        )
        if result.rowcount == 0:
            raise AssetNotHeldError(
                character_id, AmuletContainer.BELT.value, amulet_id,
            )

    async def amulet_ids(self, character_id: CharacterId) -> Sequence[AmuletId]:
        result = await self.db.execute(
            select(BeltSlot.amulet_id)
            .where(BeltSlot.character_id == character_id)
            .order_by(BeltSlot.position),
        )
        return [AmuletId(a) for a in result.scalars().all()]

    async def is_overflowing(self, character_id: CharacterId) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(BeltSlot)
            .where(BeltSlot.character_id == character_id),
        )
        return belt_is_overflowing(result.scalar_one(), self.capacity)


class SqlItemStore:
    """ItemStore backed by item_stacks."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _stack(self, character_id: CharacterId, item_id: ItemId) -> ItemStack | None:
        return await self.db.get(ItemStack, (character_id, item_id))

    async def add(
        self, character_id: CharacterId, item_id: ItemId, quantity: int,
    ) -> None:
        stack = await self._stack(character_id, item_id)
        if not stack:
            stack = ItemStack(character_id=character_id, item_id=item_id, quantity=0)
            self.db.add(stack)
        stack.quantity += quantity
        await self.db.flush()

    async def deduct(
        self, character_id: CharacterId, item_id: ItemId, quantity: int,
    ) -> None:
        stack = await self._stack(character_id, item_id)
        available = stack.quantity if stack else 0
        if available < quantity:
            raise InsufficientItemsError(character_id, item_id, quantity, available)
        if stack:
            stack.quantity -= quantity
            await self.db.flush()

    async def quantity(self, character_id: CharacterId, item_id: ItemId) -> int:
        stack = await self._stack(character_id, item_id)
        return stack.quantity if stack else 0

    async def stacks(self, character_id: CharacterId) -> dict[int, int]:
        result = await self.db.execute(
            select(ItemStack)
            .where(ItemStack.character_id == character_id)
            .where(ItemStack.quantity > 0),
        )
        return {s.item_id: s.quantity for s in result.scalars().all()}


class SqlCurrencyStore:
    """CurrencyStore backed by currency_balances."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _row(
        self, character_id: CharacterId, currency: Currency,
    ) -> CurrencyBalance | None:
        return await self.db.get(CurrencyBalance, (character_id, currency.value))

    async def add(
        self, character_id: CharacterId, currency: Currency, amount: int,
    ) -> None:
        row = await self._row(character_id, currency)
        if not row:
            row = CurrencyBalance(
                character_id=character_id, currency=currency.value, amount=0,
            )
            self.db.add(row)
        row.amount += amount
        await self.db.flush()

    async def deduct(
        self, character_id: CharacterId, currency: Currency, amount: int,
    ) -> None:
        row = await self._row(character_id, currency)
        available = row.amount if row else 0
        if available < amount:
            raise InsufficientBalanceError(
                character_id, currency.value, amount, available,
            )
        if row:
            row.amount -= amount
            await self.db.flush()

    async def balance(self, character_id: CharacterId, currency: Currency) -> int:
        row = await self._row(character_id, currency)
        return row.amount if row else 0


class SqlShipSlotStore:
    """ShipStore over ships.owner_id: the slot is the ship a character owns."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _owned(self, character_id: CharacterId) -> Ship | None:
        result = await self.db.execute(
            select(Ship).where(Ship.owner_id == character_id),
        )
        return result.scalar_one_or_none()

    async def ship_of(self, character_id: CharacterId) -> ShipId | None:
        ship = await self._owned(character_id)
        return ShipId(ship.id) if ship else None

    async def set_slot(self, character_id: CharacterId, ship_id: ShipId) -> None:
        current = await self._owned(character_id)
        if current:
            raise ShipAlreadySetError(character_id, current.id)
        ship = await self.db.get(Ship, ship_id)
        if not ship:
            raise ResourceNotFoundError("Ship", str(ship_id))
        ship.owner_id = character_id
        await self.db.flush()

    async def clear_slot(self, character_id: CharacterId) -> None:
        ship = await self._owned(character_id)
        if ship:
            ship.owner_id = None
            await self.db.flush()
